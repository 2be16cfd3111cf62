"""In-document search and replace."""

from .engine import FindEngine, MatchSet, compile_pattern, replace_all_text, search
from .highlight import HighlightSegment, split_highlights

__all__ = [
    "FindEngine",
    "HighlightSegment",
    "MatchSet",
    "compile_pattern",
    "replace_all_text",
    "search",
    "split_highlights",
]
