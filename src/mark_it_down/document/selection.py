"""Offset-based selection state and row/column conversions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Location = Tuple[int, int]  # (row, column)


class SelectionValidationError(RuntimeError):
    """Raised when a host provides offsets outside the current buffer."""

    def __init__(self, message: str, *, offsets: tuple[int, int] | None = None) -> None:
        super().__init__(message)
        self.offsets = offsets


@dataclass(frozen=True, slots=True)
class Selection:
    """Half-open ``[start, end)`` character range; ``start == end`` is a caret."""

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    def shifted(self, delta: int, *, floor: int = 0) -> "Selection":
        return Selection(max(floor, self.start + delta), max(floor, self.end + delta))

    def clamp(self, length: int) -> "Selection":
        limit = max(0, length)
        return Selection(
            max(0, min(self.start, limit)),
            max(0, min(self.end, limit)),
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


def ensure_selection(text: str, selection: Selection) -> Selection:
    if selection.start < 0 or selection.end > len(text):
        raise SelectionValidationError(
            "Selection out of range", offsets=selection.as_tuple()
        )
    return selection


def offset_for_location(text: str, location: Location) -> int:
    lines = text.split("\n")
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + max(0, min(col, len(lines[row])))


def location_for_offset(text: str, offset: int) -> Location:
    lines = text.split("\n")
    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return (row, max(0, offset - running))
        running += line_len + 1
    return (len(lines) - 1, len(lines[-1]))


__all__ = [
    "Location",
    "Selection",
    "SelectionValidationError",
    "ensure_selection",
    "location_for_offset",
    "offset_for_location",
]
