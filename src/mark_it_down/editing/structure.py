"""Structural edits: indent/outdent, list continuation, inline style wrapping.

Every function is pure: it takes the buffer text plus the current selection
and returns an :class:`EditResult`. ``handled=False`` tells the caller to fall
back to its default behaviour (e.g. the text area's own line break).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from mark_it_down.document.selection import Selection

INDENT = "  "

BULLET_PATTERN = re.compile(r"^([ \t]*)([-*+]) ")
NUMBERED_PATTERN = re.compile(r"^([ \t]*)(\d+)\. ")

STYLE_MARKERS: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "bold": ("**", "**"),
        "italic": ("_", "_"),
        "strikethrough": ("~~", "~~"),
        "code": ("`", "`"),
    }
)


@dataclass(frozen=True, slots=True)
class EditResult:
    text: str
    selection: Selection
    handled: bool = True

    @classmethod
    def unchanged(cls, text: str, selection: Selection) -> "EditResult":
        return cls(text=text, selection=selection, handled=False)


def line_start(text: str, offset: int) -> int:
    return text.rfind("\n", 0, max(0, offset)) + 1


def line_end(text: str, offset: int) -> int:
    end = text.find("\n", offset)
    return len(text) if end == -1 else end


def indent(text: str, selection: Selection) -> EditResult:
    start = line_start(text, selection.start)
    new_text = text[:start] + INDENT + text[start:]
    return EditResult(new_text, selection.shifted(len(INDENT)))


def outdent(text: str, selection: Selection) -> EditResult:
    start = line_start(text, selection.start)
    if not text.startswith(INDENT, start):
        return EditResult.unchanged(text, selection)
    new_text = text[:start] + text[start + len(INDENT) :]
    return EditResult(new_text, selection.shifted(-len(INDENT), floor=start))


def list_marker_for(line: str) -> str | None:
    """Return the marker the next list item should start with, if any."""

    bullet = BULLET_PATTERN.match(line)
    if bullet:
        leading, marker = bullet.groups()
        return f"{leading}{marker} "
    numbered = NUMBERED_PATTERN.match(line)
    if numbered:
        leading, number = numbered.groups()
        return f"{leading}{int(number) + 1}. "
    return None


def continue_list(text: str, selection: Selection) -> EditResult:
    if not selection.is_empty:
        return EditResult.unchanged(text, selection)
    caret = selection.start
    if caret < len(text) and text[caret] != "\n":
        return EditResult.unchanged(text, selection)

    marker = list_marker_for(text[line_start(text, caret) : caret])
    if marker is None:
        return EditResult.unchanged(text, selection)

    inserted = "\n" + marker
    new_text = text[:caret] + inserted + text[caret:]
    return EditResult(new_text, Selection.caret(caret + len(inserted)))


def toggle_style(text: str, selection: Selection, style: str) -> EditResult:
    try:
        prefix, suffix = STYLE_MARKERS[style]
    except KeyError as exc:
        raise KeyError(f"Unknown inline style '{style}'") from exc
    selected = text[selection.start : selection.end]
    new_text = (
        text[: selection.start] + prefix + selected + suffix + text[selection.end :]
    )
    return EditResult(new_text, selection.shifted(len(prefix)))


__all__ = [
    "BULLET_PATTERN",
    "EditResult",
    "INDENT",
    "NUMBERED_PATTERN",
    "STYLE_MARKERS",
    "continue_list",
    "indent",
    "line_end",
    "line_start",
    "list_marker_for",
    "outdent",
    "toggle_style",
]
