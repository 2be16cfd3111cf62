"""Proportional scroll synchronization between the raw and rendered views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from mark_it_down.runtime import telemetry

Side = Literal["raw", "rendered"]
SyncState = Literal["idle", "syncing"]

SIDES: tuple[Side, ...] = ("raw", "rendered")


@dataclass(frozen=True, slots=True)
class ScrollMetrics:
    """Scroll position of one view: offset plus content and viewport heights."""

    offset: float
    scroll_height: float
    client_height: float

    @property
    def max_offset(self) -> float:
        return self.scroll_height - self.client_height


def proportional_offset(
    offset: float, source_max: float, target_max: float
) -> Optional[float]:
    """Map ``offset`` onto the target extent; ``None`` when the source cannot scroll."""

    if source_max <= 0:
        return None
    ratio = min(1.0, max(0.0, offset / source_max))
    return ratio * max(0.0, target_max)


def other_side(side: Side) -> Side:
    return "rendered" if side == "raw" else "raw"


class ScrollSyncController:
    """Keeps two views aligned without reacting to its own corrective writes.

    Only scroll events from ``active_side`` (the view the pointer last
    entered) are followed. While a corrective write is being applied the
    controller sits in ``"syncing"`` and drops every incoming event.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        layout_split: bool = False,
        logger_name: str | None = None,
    ) -> None:
        self.enabled = enabled
        self.layout_split = layout_split
        self.active_side: Optional[Side] = None
        self.state: SyncState = "idle"
        self._logger_name = logger_name

    def mark_active(self, side: Side) -> None:
        if side not in SIDES:
            raise ValueError(f"Unknown scroll side '{side}'")
        self.active_side = side

    def should_follow(self, side: Side) -> bool:
        return (
            self.enabled
            and self.layout_split
            and self.state == "idle"
            and side == self.active_side
        )

    def on_scroll(
        self, side: Side, source: ScrollMetrics, target: ScrollMetrics
    ) -> Optional[float]:
        """Return the offset the other view should scroll to, if any."""

        if not self.should_follow(side):
            return None
        return proportional_offset(source.offset, source.max_offset, target.max_offset)

    def sync(
        self,
        side: Side,
        source: ScrollMetrics,
        target: ScrollMetrics,
        write: Callable[[float], None],
    ) -> Optional[float]:
        """Compute and apply the corrective scroll through ``write``."""

        offset = self.on_scroll(side, source, target)
        if offset is None:
            return None
        with telemetry.span(
            "scroll::sync",
            logger_name=self._logger_name,
            metadata={"source": side, "offset": round(offset, 2)},
        ):
            self.state = "syncing"
            try:
                write(offset)
            finally:
                self.state = "idle"
        return offset


__all__ = [
    "SIDES",
    "ScrollMetrics",
    "ScrollSyncController",
    "Side",
    "other_side",
    "proportional_offset",
]
