"""Commands and the scoped key bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from mark_it_down.context import normalize_key


@dataclass(frozen=True, slots=True)
class Condition:
    """Workspace flag a binding depends on, e.g. ``edit_mode`` or ``!dirty``."""

    flag: str
    expected: bool = True

    @classmethod
    def parse(cls, expression: str) -> "Condition":
        text = expression.strip()
        flag = text.lstrip("!").strip()
        if not flag:
            raise ValueError(f"Invalid binding condition {expression!r}")
        return cls(flag, not text.startswith("!"))

    def holds(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class Command:
    """A named editor command; ``handler(context, match)`` does the work."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("command id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object) -> object:
        return self.handler(*args)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key combination mapped to a command inside a scope.

    ``key`` is normalised on construction and ``when`` accepts flag
    expressions (``"find_open"``, ``"!dirty"``) as well as conditions.
    """

    id: str
    scope: str
    key: str
    command_id: str
    when: tuple[Condition, ...] = ()
    priority: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        for name in ("id", "scope", "command_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        conditions = tuple(
            clause if isinstance(clause, Condition) else Condition.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", conditions)

    def applies(self, flags: Mapping[str, bool]) -> bool:
        return all(condition.holds(flags) for condition in self.when)

    def ambiguous_with(self, other: "Binding") -> bool:
        """Same slot, conditions and priority: resolution could not pick one."""

        return (
            self.scope == other.scope
            and self.key == other.key
            and self.priority == other.priority
            and set(self.when) == set(other.when)
        )


__all__ = ["Binding", "Command", "Condition"]
