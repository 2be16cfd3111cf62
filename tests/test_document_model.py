from __future__ import annotations

from pathlib import Path

import pytest

from mark_it_down.document import (
    DEFAULT_MARKDOWN,
    Document,
    DocumentIOError,
    EditorBuffer,
    FileSystemHost,
    Selection,
    SelectionValidationError,
    is_openable,
    location_for_offset,
    offset_for_location,
)


def make_buffer(text: str = "hello world") -> EditorBuffer:
    return EditorBuffer.from_text(text, name="test")


def test_welcome_document_is_clean() -> None:
    document = Document.welcome()

    assert document.text == DEFAULT_MARKDOWN
    assert document.text.startswith("# Mark It Down")
    assert not document.is_dirty
    assert document.file_name == "Opening.md"


def test_dirty_tracks_saved_text() -> None:
    document = Document.opened("a", "/tmp/a.md").with_text("ab")
    assert document.is_dirty

    assert not document.with_text("a").is_dirty
    assert not document.mark_saved().is_dirty


def test_discard_restores_saved_text() -> None:
    document = Document.opened("saved", "/x.md").with_text("edited")

    assert document.discard().text == "saved"


@pytest.mark.parametrize(
    "path, name",
    [("/home/me/notes.md", "notes.md"), ("C:\\docs\\todo.md", "todo.md"), (None, "Opening.md")],
)
def test_file_name(path: str | None, name: str) -> None:
    assert Document(path=path).file_name == name


def test_selection_normalizes_reversed_offsets() -> None:
    assert Selection(5, 2).as_tuple() == (2, 5)


def test_buffer_apply_clamps_selection() -> None:
    buffer = make_buffer()

    delta = buffer.apply("hi", Selection(0, 10), label="shrink")

    assert delta.selection == Selection(0, 2)
    assert buffer.is_dirty


def test_buffer_replace_range_moves_caret_after_insert() -> None:
    buffer = make_buffer()

    buffer.replace_range(6, 11, "there", label="replace")

    assert buffer.text == "hello there"
    assert buffer.selection == Selection(11, 11)


def test_buffer_strict_selection_raises() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(SelectionValidationError):
        buffer.set_selection(Selection(1, 9), strict=True)

    assert buffer.set_selection(Selection(1, 9)) == Selection(1, 3)


def test_buffer_load_resets_selection() -> None:
    buffer = make_buffer()
    buffer.set_selection(Selection(4, 4))

    buffer.load(Document.opened("new", "/n.md"))

    assert buffer.selection == Selection(0, 0)
    assert buffer.mirror().file_name == "n.md"


def test_location_round_trip_across_lines() -> None:
    text = "ab\ncde\n"

    assert location_for_offset(text, 4) == (1, 1)
    assert offset_for_location(text, (1, 1)) == 4
    assert offset_for_location(text, (9, 9)) == len(text)


def test_file_system_host_reads_and_writes(tmp_path: Path) -> None:
    host = FileSystemHost()
    target = tmp_path / "doc.md"

    assert host.write_document(str(target), "# Title\n")
    assert host.read_document(str(target)) == "# Title\n"


def test_file_system_host_read_failure(tmp_path: Path) -> None:
    host = FileSystemHost()

    with pytest.raises(DocumentIOError) as info:
        host.read_document(str(tmp_path / "missing.md"))

    assert info.value.path == str(tmp_path / "missing.md")


def test_file_system_host_write_failure(tmp_path: Path) -> None:
    host = FileSystemHost()

    assert not host.write_document(str(tmp_path / "no-such-dir" / "doc.md"), "x")


def test_file_system_host_asset_lookup(tmp_path: Path) -> None:
    host = FileSystemHost()
    image = tmp_path / "cat.png"
    image.write_bytes(b"\x89PNG")

    assert host.resolve_asset_path(str(image)) == image.resolve().as_uri()
    assert host.resolve_asset_path(str(tmp_path / "dog.png")) is None


def test_file_system_host_default_prompt_cancels() -> None:
    chosen: list[str | None] = []

    FileSystemHost().choose_path("open", None, chosen.append)

    assert chosen == [None]


@pytest.mark.parametrize(
    ("path", "expected"),
    [("notes.md", True), ("README.MARKDOWN", True), ("todo.txt", True), ("logo.png", False)],
)
def test_open_filter(path: str, expected: bool) -> None:
    assert is_openable(path) is expected
