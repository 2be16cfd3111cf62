"""Literal substring search, circular navigation, and replacement."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional, Pattern

from mark_it_down.document.selection import Selection
from mark_it_down.runtime.telemetry import span


def compile_pattern(pattern: str, case_sensitive: bool = False) -> Optional[Pattern[str]]:
    """Compile ``pattern`` as a literal; ``None`` for an empty pattern."""

    if not pattern:
        return None
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(re.escape(pattern), flags)


def search(text: str, pattern: str, case_sensitive: bool = False) -> tuple[int, ...]:
    """Start offsets of every non-overlapping occurrence, left to right."""

    compiled = compile_pattern(pattern, case_sensitive)
    if compiled is None:
        return ()
    return tuple(match.start() for match in compiled.finditer(text))


def replace_all_text(
    text: str, pattern: str, replacement: str, case_sensitive: bool = False
) -> tuple[str, int]:
    """Substitute every match found in the *original* text in a single pass."""

    positions = search(text, pattern, case_sensitive)
    if not positions:
        return text, 0
    width = len(pattern)
    parts: list[str] = []
    cursor = 0
    for start in positions:
        parts.append(text[cursor:start])
        parts.append(replacement)
        cursor = start + width
    parts.append(text[cursor:])
    return "".join(parts), len(positions)


@dataclass(frozen=True, slots=True)
class MatchSet:
    pattern: str = ""
    case_sensitive: bool = False
    positions: tuple[int, ...] = ()
    current_index: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.positions)

    @property
    def current_offset(self) -> Optional[int]:
        if self.current_index is None:
            return None
        return self.positions[self.current_index]

    def rebased(self, positions: tuple[int, ...]) -> "MatchSet":
        if not positions:
            return replace(self, positions=(), current_index=None)
        index = self.current_index
        if index is None or index >= len(positions):
            index = 0
        return replace(self, positions=positions, current_index=index)

    def stepped(self, step: int) -> "MatchSet":
        if not self.positions:
            return self
        index = 0 if self.current_index is None else self.current_index
        return replace(self, current_index=(index + step) % len(self.positions))


class FindEngine:
    """Owns the active :class:`MatchSet`.

    Recomputation is pull-based: whoever mutates the text, the pattern, or the
    case flag calls :meth:`recompute` afterwards. Positions are never patched
    in place.
    """

    def __init__(
        self, *, case_sensitive: bool = False, logger_name: str | None = None
    ) -> None:
        self._matches = MatchSet(case_sensitive=case_sensitive)
        self._logger_name = logger_name
        # document version the positions were computed against
        self.version: Optional[int] = None

    @property
    def matches(self) -> MatchSet:
        return self._matches

    @property
    def pattern(self) -> str:
        return self._matches.pattern

    @property
    def case_sensitive(self) -> bool:
        return self._matches.case_sensitive

    @property
    def current_offset(self) -> Optional[int]:
        return self._matches.current_offset

    @property
    def current_span(self) -> Optional[Selection]:
        offset = self._matches.current_offset
        if offset is None:
            return None
        return Selection(offset, offset + len(self.pattern))

    def set_pattern(self, pattern: str) -> None:
        self._matches = replace(self._matches, pattern=pattern)

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        self._matches = replace(self._matches, case_sensitive=case_sensitive)

    def recompute(self, text: str, *, version: Optional[int] = None) -> MatchSet:
        with span(
            "find::recompute",
            logger_name=self._logger_name,
            metadata={"pattern_length": len(self.pattern), "text_length": len(text)},
        ) as handle:
            positions = search(text, self.pattern, self.case_sensitive)
            self._matches = self._matches.rebased(positions)
            self.version = version
            handle.add_metadata("matches", len(positions))
        return self._matches

    def next(self) -> Optional[int]:
        self._matches = self._matches.stepped(1)
        return self._matches.current_offset

    def previous(self) -> Optional[int]:
        self._matches = self._matches.stepped(-1)
        return self._matches.current_offset

    def replace_current(
        self, text: str, replacement: str
    ) -> Optional[tuple[str, Selection]]:
        """Replace the current match; the caller must :meth:`recompute` afterwards."""

        target = self.current_span
        if target is None or target.end > len(text):
            return None
        new_text = text[: target.start] + replacement + text[target.end :]
        return new_text, Selection(target.start, target.start + len(replacement))

    def replace_all(self, text: str, replacement: str) -> tuple[str, int]:
        return replace_all_text(text, self.pattern, replacement, self.case_sensitive)

    def status_label(self) -> str:
        matches = self._matches
        if matches.current_index is None:
            return "0/0"
        return f"{matches.current_index + 1}/{matches.count}"


__all__ = [
    "FindEngine",
    "MatchSet",
    "compile_pattern",
    "replace_all_text",
    "search",
]
