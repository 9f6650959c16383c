"""Trip-wide orchestration: day-by-day generation and global resolution."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from tripline.config.settings import TimelineSettings, resolve_settings
from tripline.domain.enums import LegKind, PoolStrategy
from tripline.domain.exceptions import InvalidTripWindow
from tripline.domain.models import (
    AvailabilityCalendar,
    MovableItem,
    TimelineEvent,
    TransitLeg,
    TripTimeline,
    TripWindow,
    is_aware,
)
from tripline.domain.planning.calendar import default_calendar
from tripline.domain.planning.events import DayInputs, build_day
from tripline.domain.planning.packing import ItemQueue
from tripline.domain.planning.resolver import resolve_dependencies
from tripline.infrastructure.logging import StructuredLogger, get_logger
from tripline.tools.interfaces import AttractionSource, HotelSelection, TransitLegProvider

_LOGGER = logging.getLogger("tripline.timeline")


def validate_trip_window(trip: TripWindow) -> None:
    if is_aware(trip.start_at) != is_aware(trip.end_at):
        raise InvalidTripWindow("trip start and end must both be timezone-aware or both naive")
    if trip.end_at <= trip.start_at:
        raise InvalidTripWindow(
            f"trip end {trip.end_at.isoformat()} must be after trip start {trip.start_at.isoformat()}"
        )


def chunk_for_day(items: Sequence[MovableItem], day_index: int, day_count: int) -> tuple[MovableItem, ...]:
    """Contiguous ``ceil(len/day_count)``-sized share of ``items`` for ``day_index``."""
    if not items or day_count <= 0:
        return ()
    per_day = math.ceil(len(items) / day_count)
    start = day_index * per_day
    return tuple(items[start : start + per_day])


def dedupe_items(items: Iterable[MovableItem], *, seen: set[str]) -> list[MovableItem]:
    rows: list[MovableItem] = []
    for item in items:
        if item.id in seen:
            _LOGGER.warning("duplicate movable item %s ignored", item.id)
            continue
        seen.add(item.id)
        rows.append(item)
    return rows


def _legs_for_day(
    provider: Optional[TransitLegProvider],
    day: date,
    trip: TripWindow,
) -> dict[LegKind, TransitLeg]:
    legs: dict[LegKind, TransitLeg] = {}
    if provider is None:
        return legs
    trip_aware = is_aware(trip.start_at)
    for kind in LegKind:
        leg = provider.find_leg(kind, day)
        if leg is None:
            continue
        if is_aware(leg.start_at) != trip_aware:
            raise InvalidTripWindow(
                f"transit leg {kind.value} on {day.isoformat()} and the trip window "
                "must both be timezone-aware or both naive"
            )
        legs[kind] = leg
    return legs


class TripTimelineBuilder:
    """Runs every day of the trip and resolves all events once."""

    def __init__(
        self,
        *,
        calendar: Optional[AvailabilityCalendar] = None,
        settings: Optional[TimelineSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.calendar = calendar or default_calendar()
        self.settings = settings or resolve_settings()
        self.logger = logger or get_logger()

    def _day_queues(
        self,
        attractions: Sequence[MovableItem],
        venues: Sequence[MovableItem],
        day_count: int,
    ) -> list[tuple[ItemQueue, ItemQueue]]:
        return [
            (
                ItemQueue.of(chunk_for_day(attractions, idx, day_count)),
                ItemQueue.of(chunk_for_day(venues, idx, day_count)),
            )
            for idx in range(day_count)
        ]

    def build(
        self,
        trip: TripWindow,
        *,
        attractions: AttractionSource | Sequence[MovableItem] = (),
        venues: AttractionSource | Sequence[MovableItem] = (),
        hotels: Optional[HotelSelection] = None,
        legs: Optional[TransitLegProvider] = None,
    ) -> TripTimeline:
        validate_trip_window(trip)
        seen: set[str] = set()
        attraction_pool = dedupe_items(_materialize(attractions), seen=seen)
        venue_pool = dedupe_items(_materialize(venues), seen=seen)
        day_count = trip.day_count
        strategy = self.settings.pool_strategy

        self.logger.build_start(
            "trip_timeline",
            days=day_count,
            attractions=len(attraction_pool),
            venues=len(venue_pool),
            strategy=strategy.value,
        )

        chunked = self._day_queues(attraction_pool, venue_pool, day_count) if strategy == PoolStrategy.CHUNKED else []
        shared_attractions = ItemQueue.of(attraction_pool)
        shared_venues = ItemQueue.of(venue_pool)
        dropped: list[str] = []
        all_events: list[TimelineEvent] = []
        previous_last: Optional[TimelineEvent] = None

        for idx in range(day_count):
            day_number = idx + 1
            day = trip.date_for_day(day_number)
            if strategy == PoolStrategy.CHUNKED:
                day_attractions, day_venues = chunked[idx]
            else:
                day_attractions, day_venues = shared_attractions, shared_venues
            inputs = DayInputs(
                day_number=day_number,
                day=day,
                is_last_day=day_number == day_count,
                hotel=hotels.hotel_for_day(day_number) if hotels is not None else None,
                legs=_legs_for_day(legs, day, trip),
                attractions=day_attractions,
                venues=day_venues,
            )
            result = build_day(
                trip,
                inputs,
                calendar=self.calendar,
                settings=self.settings,
                previous_last=previous_last,
            )
            if strategy == PoolStrategy.CHUNKED:
                leftovers = result.attractions.remaining() + result.venues.remaining()
                dropped.extend(item.id for item in leftovers)
            else:
                shared_attractions, shared_venues = result.attractions, result.venues
            all_events.extend(result.events)
            if result.events:
                previous_last = result.events[-1]
            self.logger.day_built(
                day_number,
                date=day.isoformat(),
                events=len(result.events),
                hotel=inputs.hotel is not None,
                legs=sorted(kind.value for kind in inputs.legs),
                skipped=list(result.skipped_slots),
            )

        if strategy == PoolStrategy.SHARED:
            dropped.extend(item.id for item in shared_attractions.remaining() + shared_venues.remaining())

        timeline = resolve_dependencies(all_events)
        if timeline.unresolved_ids:
            self.logger.warning(
                "resolve",
                "events appended without dependency order",
                unresolved_ids=list(timeline.unresolved_ids),
            )
        self.logger.build_end(
            "trip_timeline",
            events_count=len(timeline.events),
            dropped_items=len(dropped),
        )
        return TripTimeline(trip=trip, timeline=timeline, dropped_item_ids=tuple(dropped))


def _materialize(source: AttractionSource | Sequence[MovableItem]) -> list[MovableItem]:
    if isinstance(source, AttractionSource):
        return list(source.list_items())
    return list(source)


def build_trip_timeline(
    trip: TripWindow,
    *,
    attractions: AttractionSource | Sequence[MovableItem] = (),
    venues: AttractionSource | Sequence[MovableItem] = (),
    hotels: Optional[HotelSelection] = None,
    legs: Optional[TransitLegProvider] = None,
    calendar: Optional[AvailabilityCalendar] = None,
    settings: Optional[TimelineSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> TripTimeline:
    builder = TripTimelineBuilder(calendar=calendar, settings=settings, logger=logger)
    return builder.build(trip, attractions=attractions, venues=venues, hotels=hotels, legs=legs)


__all__ = [
    "TripTimelineBuilder",
    "build_trip_timeline",
    "chunk_for_day",
    "dedupe_items",
    "validate_trip_window",
]
