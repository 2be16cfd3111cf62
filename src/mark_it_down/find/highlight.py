"""Split rendered text nodes around search matches."""

from __future__ import annotations

from dataclasses import dataclass

from .engine import compile_pattern


@dataclass(frozen=True, slots=True)
class HighlightSegment:
    text: str
    highlighted: bool = False


def split_highlights(
    text: str, pattern: str, case_sensitive: bool = False
) -> tuple[HighlightSegment, ...]:
    compiled = compile_pattern(pattern, case_sensitive)
    if compiled is None or not text:
        return (HighlightSegment(text),) if text else ()

    segments: list[HighlightSegment] = []
    cursor = 0
    for match in compiled.finditer(text):
        if match.start() > cursor:
            segments.append(HighlightSegment(text[cursor : match.start()]))
        segments.append(HighlightSegment(match.group(0), highlighted=True))
        cursor = match.end()
    if cursor < len(text):
        segments.append(HighlightSegment(text[cursor:]))
    return tuple(segments)


__all__ = ["HighlightSegment", "split_highlights"]
