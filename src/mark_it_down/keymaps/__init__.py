"""Scoped key bindings and the built-in command table."""

from .models import Binding, Command, Condition
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapMatch, KeymapResolver
from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_keymaps

__all__ = [
    "Binding",
    "Command",
    "Condition",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "KeymapConflictError",
    "KeymapMatch",
    "KeymapRegistry",
    "KeymapResolver",
    "load_default_keymaps",
]
