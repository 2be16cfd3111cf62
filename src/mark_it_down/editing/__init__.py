"""Structural editing assistance for the raw Markdown view."""

from .structure import (
    STYLE_MARKERS,
    EditResult,
    continue_list,
    indent,
    list_marker_for,
    outdent,
    toggle_style,
)

__all__ = [
    "EditResult",
    "STYLE_MARKERS",
    "continue_list",
    "indent",
    "list_marker_for",
    "outdent",
    "toggle_style",
]
