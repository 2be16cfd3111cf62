from __future__ import annotations

import pytest

from mark_it_down.document import Selection
from mark_it_down.editing import continue_list, indent, outdent, toggle_style


def test_indent_prefixes_current_line() -> None:
    result = indent("one\ntwo", Selection(5, 6))

    assert result.text == "one\n  two"
    assert result.selection == Selection(7, 8)


def test_outdent_removes_two_spaces() -> None:
    result = outdent("    item", Selection(6, 6))

    assert result.handled
    assert result.text == "  item"
    assert result.selection == Selection(4, 4)


def test_outdent_is_noop_without_leading_spaces() -> None:
    result = outdent(" item", Selection(3, 3))

    assert not result.handled
    assert result.text == " item"
    assert result.selection == Selection(3, 3)


def test_outdent_floors_selection_at_line_start() -> None:
    result = outdent("x\n  item", Selection(3, 3))

    assert result.text == "x\nitem"
    assert result.selection == Selection(2, 2)


def test_continue_bullet_list() -> None:
    text = "- first\nafter"
    result = continue_list(text, Selection(7, 7))

    assert result.handled
    assert result.text == "- first\n- \nafter"
    assert result.selection == Selection(10, 10)


def test_continue_numbered_list_increments() -> None:
    text = "  9. ninth\n"
    result = continue_list(text, Selection(10, 10))

    assert result.text == "  9. ninth\n  10. \n"
    assert result.selection == Selection.caret(17)


def test_continue_list_at_end_of_buffer() -> None:
    result = continue_list("* star", Selection(6, 6))

    assert result.text == "* star\n* "
    assert result.selection == Selection(9, 9)


def test_continue_list_requires_line_break_after_caret() -> None:
    result = continue_list("- item", Selection(3, 3))

    assert not result.handled


def test_continue_list_ignores_plain_lines() -> None:
    result = continue_list("plain\n", Selection(5, 5))

    assert not result.handled
    assert result.text == "plain\n"


def test_toggle_style_wraps_selection() -> None:
    result = toggle_style("make bold", Selection(5, 9), "bold")

    assert result.text == "make **bold**"
    assert result.selection == Selection(7, 11)


def test_toggle_style_on_caret_leaves_caret_between_markers() -> None:
    result = toggle_style("ab", Selection(1, 1), "italic")

    assert result.text == "a__b"
    assert result.selection == Selection(2, 2)


@pytest.mark.parametrize(
    ("style", "expected"),
    [("strikethrough", "~~x~~"), ("code", "`x`")],
)
def test_toggle_style_markers(style: str, expected: str) -> None:
    assert toggle_style("x", Selection(0, 1), style).text == expected


def test_toggle_style_unknown() -> None:
    with pytest.raises(KeyError):
        toggle_style("x", Selection(0, 1), "underline")


def test_indent_then_outdent_restores_line() -> None:
    original = Selection(2, 4)
    indented = indent("title", original)

    restored = outdent(indented.text, indented.selection)

    assert restored.text == "title"
    assert restored.selection == original


def test_continue_nested_bullet_and_numbered_items() -> None:
    nested = continue_list("  - item", Selection(8, 8))
    numbered = continue_list("3. item", Selection(7, 7))

    assert nested.text.split("\n")[-1] == "  - "
    assert nested.selection == Selection(len(nested.text), len(nested.text))
    assert numbered.text.split("\n")[-1] == "4. "
