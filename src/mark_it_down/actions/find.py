"""Find bar actions."""

from __future__ import annotations

from mark_it_down.context import CommandContext, CommandResult


def open_find(context: CommandContext, match) -> CommandResult:
    del match
    context.workspace.open_find()
    return CommandResult(consumed=True, status="find_open")


def close_find(context: CommandContext, match) -> CommandResult:
    del match
    context.workspace.close_find()
    return CommandResult(consumed=True, status="find_closed")


def find_next(context: CommandContext, match) -> CommandResult:
    del match
    offset = context.workspace.find_next()
    return CommandResult(
        consumed=True,
        status="find_next" if offset is not None else "no_matches",
        message=context.find.status_label(),
    )


def find_previous(context: CommandContext, match) -> CommandResult:
    del match
    offset = context.workspace.find_previous()
    return CommandResult(
        consumed=True,
        status="find_previous" if offset is not None else "no_matches",
        message=context.find.status_label(),
    )


def replace_current(context: CommandContext, match) -> CommandResult:
    del match
    replaced = context.workspace.replace_current()
    return CommandResult(
        consumed=True,
        status="replaced" if replaced else "no_matches",
        message=context.find.status_label(),
    )


def replace_all(context: CommandContext, match) -> CommandResult:
    del match
    count = context.workspace.replace_all()
    return CommandResult(consumed=True, status="replaced_all", message=str(count))


def toggle_case_sensitive(context: CommandContext, match) -> CommandResult:
    del match
    flag = not context.find.case_sensitive
    context.workspace.set_case_sensitive(flag)
    return CommandResult(
        consumed=True, status="case_sensitive", message="on" if flag else "off"
    )


__all__ = [
    "close_find",
    "find_next",
    "find_previous",
    "open_find",
    "replace_all",
    "replace_current",
    "toggle_case_sensitive",
]
