"""The command table: commands by id, bindings by ``(scope, key)``."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from mark_it_down.runtime.telemetry import span

from .models import Binding, Command


class KeymapConflictError(RuntimeError):
    """Raised when a binding would make a ``(scope, key)`` slot ambiguous."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.scope}: {binding.key}) is ambiguous with "
            f"{[existing.id for existing in self.conflicts]}"
        )


class KeymapRegistry:
    """Holds every command and binding; misconfiguration fails here, never at dispatch."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, Command] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[tuple[str, str], list[Binding]] = {}
        self._logger_name = logger_name

    def command(self, command_id: str) -> Command:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def add_command(self, command: Command) -> Command:
        if command.id in self._commands:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command
        return command

    def bind(self, binding: Binding) -> Binding:
        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            metadata={"binding": binding.id, "scope": binding.scope, "key": binding.key},
        ):
            if binding.command_id not in self._commands:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command '{binding.command_id}'"
                )
            if binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            slot = self._slots.setdefault((binding.scope, binding.key), [])
            conflicts = [existing for existing in slot if binding.ambiguous_with(existing)]
            if conflicts:
                raise KeymapConflictError(binding, conflicts)
            slot.append(binding)
            slot.sort(key=lambda entry: (-entry.priority, entry.id))
            self._bindings[binding.id] = binding
            return binding

    def candidates(self, scope: str, key: str) -> tuple[Binding, ...]:
        """Bindings for ``key`` in ``scope``, highest priority first."""

        return tuple(self._slots.get((scope, key), ()))

    def bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if scope is None or binding.scope == scope:
                yield binding

    def scopes(self) -> tuple[str, ...]:
        return tuple(sorted({scope for scope, _key in self._slots}))


__all__ = ["KeymapConflictError", "KeymapRegistry"]
