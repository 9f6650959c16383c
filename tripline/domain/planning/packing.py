"""Greedy window packing of movable items.

Pool order is precedence: the head of the queue takes the earliest free
time. Placements never extend past the window end; an item longer than the
remaining time is truncated and its leftover duration is not offered again.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from tripline.domain.constants import DEFAULT_VENUE_MINUTES
from tripline.domain.enums import ItemKind
from tripline.domain.models import MovableItem

DEFAULT_ATTRACTION_MINUTES = 90


@dataclass(frozen=True)
class ItemQueue:
    """Immutable FIFO over movable items; popping returns a new queue."""

    items: tuple[MovableItem, ...] = ()
    head_index: int = 0

    @classmethod
    def of(cls, items: Iterable[MovableItem]) -> "ItemQueue":
        return cls(items=tuple(items))

    def __len__(self) -> int:
        return len(self.items) - self.head_index

    def head(self) -> Optional[MovableItem]:
        if not len(self):
            return None
        return self.items[self.head_index]

    def pop(self) -> tuple[MovableItem, "ItemQueue"]:
        if not len(self):
            raise IndexError("pop from empty ItemQueue")
        return self.items[self.head_index], ItemQueue(items=self.items, head_index=self.head_index + 1)

    def remaining(self) -> tuple[MovableItem, ...]:
        return self.items[self.head_index :]


@dataclass(frozen=True)
class Span:
    start_at: datetime
    end_at: datetime


@dataclass(frozen=True)
class PlacedItem:
    item: MovableItem
    start_at: datetime
    end_at: datetime
    natural_minutes: int = 0
    lead: Optional[Span] = None
    trail: Optional[Span] = None

    @property
    def clipped(self) -> bool:
        return self.end_at - self.start_at < timedelta(minutes=self.natural_minutes)


@dataclass(frozen=True)
class PackResult:
    placements: tuple[PlacedItem, ...]
    remaining: ItemQueue


def resolve_duration_minutes(item: MovableItem, *, venue_minutes: int = DEFAULT_VENUE_MINUTES) -> int:
    if item.duration_minutes:
        return item.duration_minutes
    if item.kind == ItemKind.VENUE:
        return venue_minutes
    return DEFAULT_ATTRACTION_MINUTES


def _leg_span(cursor: datetime, minutes: float, window_end: datetime) -> Optional[Span]:
    if minutes <= 0:
        return None
    return Span(start_at=cursor, end_at=min(cursor + timedelta(minutes=minutes), window_end))


def pack_window(
    window_start: datetime,
    window_end: datetime,
    queue: ItemQueue,
    *,
    lead_minutes: float = 0.0,
    trail_minutes: float = 0.0,
    venue_minutes: int = DEFAULT_VENUE_MINUTES,
) -> PackResult:
    """Fill ``[window_start, window_end)`` from the head of ``queue``.

    ``lead_minutes``/``trail_minutes`` reserve transit time before and after
    each placement inside the same window. An item is only taken when it
    still gets a non-empty span after its lead transit.
    """
    placements: list[PlacedItem] = []
    cursor = window_start
    remaining = queue
    while len(remaining) and cursor < window_end:
        lead = _leg_span(cursor, lead_minutes, window_end)
        start = lead.end_at if lead else cursor
        if start >= window_end:
            break
        item, remaining = remaining.pop()
        duration = resolve_duration_minutes(item, venue_minutes=venue_minutes)
        end = min(start + timedelta(minutes=duration), window_end)
        trail = _leg_span(end, trail_minutes, window_end)
        if trail is not None and trail.start_at >= trail.end_at:
            trail = None
        placements.append(
            PlacedItem(
                item=item,
                start_at=start,
                end_at=end,
                natural_minutes=duration,
                lead=lead,
                trail=trail,
            )
        )
        cursor = trail.end_at if trail else end
    return PackResult(placements=tuple(placements), remaining=remaining)


__all__ = [
    "DEFAULT_ATTRACTION_MINUTES",
    "ItemQueue",
    "PackResult",
    "PlacedItem",
    "Span",
    "pack_window",
    "resolve_duration_minutes",
]
