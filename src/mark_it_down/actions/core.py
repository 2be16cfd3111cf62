"""Global actions: view mode, layout, and document lifecycle."""

from __future__ import annotations

from mark_it_down.context import CommandContext, CommandResult


def toggle_view_mode(context: CommandContext, match) -> CommandResult:
    del match
    mode = context.workspace.toggle_view_mode()
    return CommandResult(consumed=True, status="view_mode", message=mode)


def toggle_layout(context: CommandContext, match) -> CommandResult:
    del match
    layout = context.workspace.toggle_layout()
    return CommandResult(consumed=True, status="layout", message=layout)


def toggle_scroll_sync(context: CommandContext, match) -> CommandResult:
    del match
    enabled = context.workspace.toggle_scroll_sync()
    return CommandResult(
        consumed=True, status="scroll_sync", message="on" if enabled else "off"
    )


def new_document(context: CommandContext, match) -> CommandResult:
    del match
    context.workspace.new_document()
    return CommandResult(consumed=True, status="document_new")


def open_document(context: CommandContext, match) -> CommandResult:
    del match
    return context.workspace.request_open()


def save_document(context: CommandContext, match) -> CommandResult:
    del match
    return context.workspace.save()


def save_document_as(context: CommandContext, match) -> CommandResult:
    del match
    return context.workspace.request_save_as()


def discard_changes(context: CommandContext, match) -> CommandResult:
    del match
    if not context.buffer.is_dirty:
        return CommandResult(consumed=True, status="noop")
    context.workspace.discard()
    return CommandResult(consumed=True, status="document_discarded")


__all__ = [
    "discard_changes",
    "new_document",
    "open_document",
    "save_document",
    "save_document_as",
    "toggle_layout",
    "toggle_scroll_sync",
    "toggle_view_mode",
]
