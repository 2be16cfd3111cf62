"""Picks the binding for a key press across the active scopes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from mark_it_down.runtime.telemetry import span

from .models import Binding, Command
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class KeymapMatch:
    binding: Binding
    command: Command


class KeymapResolver:
    """Scopes are searched in order; the first scope with an applicable binding wins.

    Inside a scope the highest priority applicable binding wins, ties go to
    the binding id so the outcome does not depend on registration order.
    """

    def __init__(self, registry: KeymapRegistry, *, logger_name: str | None = None) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self,
        scopes: Sequence[str],
        key: str,
        flags: Optional[Mapping[str, bool]] = None,
    ) -> Optional[KeymapMatch]:
        flags = flags or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            metadata={"scopes": list(scopes), "key": key},
        ) as handle:
            for scope in scopes:
                for binding in self._registry.candidates(scope, key):
                    if binding.applies(flags):
                        handle.add_metadata("binding", binding.id)
                        return KeymapMatch(binding, self._registry.command(binding.command_id))
            handle.add_metadata("binding", None)
            return None


__all__ = ["KeymapMatch", "KeymapResolver"]
