from __future__ import annotations

from typing import Any, Dict, List

from markdown_it import MarkdownIt

from mark_it_down.adapters.textual import TextualUIHooks, TextualWorkspaceAdapter
from mark_it_down.document import BufferMirror, Selection
from mark_it_down.workspace import Workspace

from fakes import FakeHost


def make_adapter(**hooks: Any) -> tuple[TextualWorkspaceAdapter, Dict[str, List[Any]]]:
    calls: Dict[str, List[Any]] = {
        "buffer": [],
        "status": [],
        "view": [],
        "find": [],
        "select": [],
        "preview": [],
    }
    defaults: Dict[str, Any] = {
        "update_buffer": lambda mirror: calls["buffer"].append(mirror),
        "update_status": lambda status: calls["status"].append(status),
        "update_view": lambda mode, layout: calls["view"].append((mode, layout)),
        "update_find": lambda is_open, pattern, status: calls["find"].append(
            (is_open, pattern, status)
        ),
        "select_range": lambda selection: calls["select"].append(selection),
        "refresh_preview": lambda: calls["preview"].append(True),
    }
    defaults.update(hooks)
    workspace = Workspace(FakeHost({"/docs/a.md": "- a\n"}))
    return TextualWorkspaceAdapter(workspace, TextualUIHooks(**defaults)), calls


def test_adapter_pushes_initial_state() -> None:
    adapter, calls = make_adapter()

    mirror = calls["buffer"][0]
    assert isinstance(mirror, BufferMirror)
    assert mirror.text == adapter.workspace.buffer.text
    assert calls["view"] == [("read", "single")]
    assert calls["status"][-1].startswith("Opening.md | read")


def test_adapter_dispatches_textual_key_names() -> None:
    adapter, calls = make_adapter()

    result = adapter.handle_textual_key("ctrl+e", origin="rendered")

    assert result.consumed
    assert calls["view"][-1] == ("edit", "single")


def test_unbound_keys_are_not_consumed() -> None:
    adapter, _ = make_adapter()

    result = adapter.handle_textual_key("x", character="x", origin="raw")

    assert not result.consumed


def test_structural_edit_refreshes_raw_view() -> None:
    adapter, calls = make_adapter()
    adapter.workspace.open_path("/docs/a.md")
    adapter.handle_textual_key("ctrl+e", origin="app")
    adapter.handle_selection(Selection(3, 3))

    adapter.handle_textual_key("enter", origin="raw")

    mirror = calls["buffer"][-1]
    assert mirror.text == "- a\n- \n"
    assert mirror.selection == Selection(6, 6)
    assert mirror.attributes["label"] == "continue_list"
    assert calls["preview"]


def test_open_marks_mirror_as_fresh_load() -> None:
    adapter, calls = make_adapter()

    adapter.workspace.open_path("/docs/a.md")

    assert calls["buffer"][-1].attributes["label"] == "open"


def test_text_changes_are_recorded_once() -> None:
    adapter, calls = make_adapter()
    text = adapter.workspace.buffer.text + "!"

    assert adapter.handle_text_changed(text, Selection(len(text), len(text)))
    assert not adapter.handle_text_changed(text, Selection(0, 0))
    assert adapter.workspace.buffer.is_dirty
    assert calls["status"][-1].startswith("*Opening.md")


def test_find_navigation_selects_range() -> None:
    adapter, calls = make_adapter()
    adapter.workspace.open_path("/docs/a.md")
    adapter.handle_textual_key("ctrl+e", origin="app")
    adapter.handle_textual_key("ctrl+f", origin="raw")

    adapter.set_find_pattern("a")
    adapter.handle_textual_key("f3", origin="find")

    assert calls["find"][-1] == (True, "a", "1/1")
    assert calls["select"][-1] == Selection(2, 3)


def test_parser_factory_reflects_find_query() -> None:
    adapter, _ = make_adapter()
    adapter.workspace.open_find()
    adapter.set_find_pattern("Mark")

    parser = adapter.parser_factory()

    assert isinstance(parser, MarkdownIt)
    assert "<mark>Mark</mark>" in parser.render("Mark it")


def test_adapter_logs_through_hook() -> None:
    lines: List[str] = []
    adapter, _ = make_adapter(log=lines.append)

    adapter.handle_textual_key("ctrl+y", origin="app")

    assert any(line.startswith("key ->") for line in lines)
    assert any("status='scroll_sync'" in line for line in lines)


def test_read_mode_navigation_reveals_rendered_block() -> None:
    revealed: List[int] = []
    adapter, _ = make_adapter(reveal_block=revealed.append)
    adapter.workspace.buffer.apply("intro\n\ncat\n\ncat\n", Selection(0, 0), label="test")
    adapter.workspace.open_find()
    adapter.set_find_pattern("cat")

    adapter.handle_textual_key("f3", origin="app")

    assert revealed == [2]
