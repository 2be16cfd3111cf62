"""Shared types passed to every keymap action."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Literal, Optional

from mark_it_down.document.buffer import EditorBuffer
from mark_it_down.find.engine import FindEngine

if TYPE_CHECKING:  # pragma: no cover
    from mark_it_down.workspace.manager import Workspace

Origin = Literal["raw", "rendered", "find", "app"]


MODIFIERS = ("ctrl", "alt", "shift", "meta", "super", "hyper")


def normalize_key(combo: str) -> str:
    """Canonical spelling of a key combination: ``Shift+Ctrl+S`` -> ``ctrl+shift+s``.

    Modifiers are deduplicated and ordered as in :data:`MODIFIERS`, anything
    else a terminal reports follows alphabetically. ``ctrl++`` spells the plus
    key itself.
    """

    if not combo.strip():
        raise ValueError("key combination cannot be empty")
    parts = combo.strip().lower().split("+")
    key = parts[-1] or "+"
    held = {part for part in parts[:-1] if part}
    ordered = [modifier for modifier in MODIFIERS if modifier in held]
    ordered.extend(sorted(held.difference(MODIFIERS)))
    return "+".join(ordered + [key])


@dataclass(slots=True)
class KeyInput:
    """A key press, already normalised, plus the view it was typed into."""

    token: str
    origin: Origin = "app"
    text: Optional[str] = None

    @classmethod
    def parse(cls, combo: str, *, origin: Origin = "app") -> "KeyInput":
        return cls(token=normalize_key(combo), origin=origin)


@dataclass(slots=True)
class CommandResult:
    """Result returned from an action; ``consumed=False`` lets the host act."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Minimal event bus the workspace uses to notify its host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        listeners = self._subscribers.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Services every action can reach."""

    buffer: EditorBuffer
    find: FindEngine
    bus: EventBus
    workspace: "Workspace"
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "CommandContext",
    "CommandResult",
    "EventBus",
    "KeyInput",
    "MODIFIERS",
    "Origin",
    "normalize_key",
]
