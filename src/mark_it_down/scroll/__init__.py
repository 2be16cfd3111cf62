"""Scroll synchronization for the split raw/rendered layout."""

from .sync import (
    SIDES,
    ScrollMetrics,
    ScrollSyncController,
    Side,
    other_side,
    proportional_offset,
)

__all__ = [
    "SIDES",
    "ScrollMetrics",
    "ScrollSyncController",
    "Side",
    "other_side",
    "proportional_offset",
]
