"""Actions that run structural edits against the raw view's buffer."""

from __future__ import annotations

from functools import partial
from typing import Callable

from mark_it_down.context import CommandContext, CommandResult
from mark_it_down.document.selection import Selection
from mark_it_down.editing import structure
from mark_it_down.editing.structure import EditResult

StructuralEdit = Callable[[str, Selection], EditResult]


def _apply(
    context: CommandContext,
    edit: StructuralEdit,
    *,
    label: str,
    consume_unhandled: bool = True,
) -> CommandResult:
    buffer = context.buffer
    result = edit(buffer.text, buffer.selection)
    if not result.handled:
        return CommandResult(consumed=consume_unhandled, status="noop", message=label)
    delta = buffer.apply(result.text, result.selection, label=label)
    context.workspace.commit(delta)
    return CommandResult(consumed=True, status="edited", message=label)


def indent_line(context: CommandContext, match) -> CommandResult:
    del match
    return _apply(context, structure.indent, label="indent")


def outdent_line(context: CommandContext, match) -> CommandResult:
    del match
    return _apply(context, structure.outdent, label="outdent")


def continue_list_item(context: CommandContext, match) -> CommandResult:
    """Continue a bullet or numbered list; plain lines fall through to the host."""

    del match
    return _apply(
        context, structure.continue_list, label="continue_list", consume_unhandled=False
    )


def toggle_inline_style(context: CommandContext, match, *, style: str) -> CommandResult:
    del match
    edit = partial(structure.toggle_style, style=style)
    return _apply(context, edit, label=f"style_{style}")


toggle_bold = partial(toggle_inline_style, style="bold")
toggle_italic = partial(toggle_inline_style, style="italic")
toggle_strikethrough = partial(toggle_inline_style, style="strikethrough")
toggle_code = partial(toggle_inline_style, style="code")


__all__ = [
    "continue_list_item",
    "indent_line",
    "outdent_line",
    "toggle_bold",
    "toggle_code",
    "toggle_inline_style",
    "toggle_italic",
    "toggle_strikethrough",
]
