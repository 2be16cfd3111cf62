"""Workspace tying the editor core together for a host."""

from mark_it_down.context import CommandContext, CommandResult, EventBus, KeyInput

from .manager import EDITING_SCOPE, FIND_SCOPE, GLOBAL_SCOPE, ViewMode, Workspace

__all__ = [
    "CommandContext",
    "CommandResult",
    "EDITING_SCOPE",
    "EventBus",
    "FIND_SCOPE",
    "GLOBAL_SCOPE",
    "KeyInput",
    "ViewMode",
    "Workspace",
]
