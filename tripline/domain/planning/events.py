"""Per-day timeline event construction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from tripline.config.settings import TimelineSettings
from tripline.domain.enums import EventKind, LegKind, SlotKind
from tripline.domain.models import (
    AttractionPayload,
    AvailabilityCalendar,
    ConcreteSlot,
    EventPayload,
    Hotel,
    HotelPayload,
    MealPayload,
    SleepPayload,
    TimelineEvent,
    TransitLeg,
    TransitPayload,
    TripWindow,
)
from tripline.domain.planning.calendar import instantiate
from tripline.domain.planning.packing import ItemQueue, PlacedItem, Span, pack_window

_LOGGER = logging.getLogger("tripline.events")


@dataclass(frozen=True)
class DayInputs:
    day_number: int
    day: date
    is_last_day: bool
    hotel: Optional[Hotel] = None
    legs: Mapping[LegKind, TransitLeg] = field(default_factory=dict)
    attractions: ItemQueue = field(default_factory=ItemQueue)
    venues: ItemQueue = field(default_factory=ItemQueue)


@dataclass(frozen=True)
class DayBuild:
    events: tuple[TimelineEvent, ...]
    attractions: ItemQueue
    venues: ItemQueue
    skipped_slots: tuple[str, ...] = ()


def event_id(day_number: int, sequence: int) -> str:
    return f"d{day_number}-{sequence:03d}"


def _leg_minutes(leg: Optional[TransitLeg]) -> float:
    if leg is None:
        return 0.0
    return leg.elapsed.total_seconds() / 60.0


def _transit_payload(leg: TransitLeg, *, elapsed_minutes: Optional[float] = None) -> TransitPayload:
    return TransitPayload(
        leg_kind=leg.kind,
        origin=leg.origin,
        destination=leg.destination,
        mode=leg.mode,
        elapsed_minutes=round(_leg_minutes(leg) if elapsed_minutes is None else elapsed_minutes, 1),
    )


class DayEventBuilder:
    """Builds one day's events in fixed construction order.

    Each event depends on every event built earlier the same day that does
    not start after it; the first event of a day after day 1 also depends on
    the previous day's last event under the same rule.
    """

    def __init__(
        self,
        trip: TripWindow,
        inputs: DayInputs,
        *,
        calendar: AvailabilityCalendar,
        settings: TimelineSettings,
        previous_last: Optional[TimelineEvent] = None,
    ) -> None:
        self._trip = trip
        self._inputs = inputs
        self._calendar = calendar
        self._settings = settings
        self._previous_last = previous_last
        self._events: list[TimelineEvent] = []
        self._skipped: list[str] = []

    def _dependencies_for(self, start_at: datetime) -> tuple[str, ...]:
        deps: list[str] = []
        previous = self._previous_last
        if not self._events and previous is not None and previous.start_at <= start_at:
            deps.append(previous.id)
        deps.extend(event.id for event in self._events if event.start_at <= start_at)
        return tuple(deps)

    def _append(
        self,
        kind: EventKind,
        start_at: datetime,
        end_at: datetime,
        payload: EventPayload,
    ) -> Optional[TimelineEvent]:
        start_at, end_at = self._trip.clamp(start_at, end_at)
        if start_at >= end_at:
            return None
        sequence = len(self._events) + 1
        event = TimelineEvent(
            id=event_id(self._inputs.day_number, sequence),
            day_number=self._inputs.day_number,
            sequence=sequence,
            dependencies=self._dependencies_for(start_at),
            kind=kind,
            start_at=start_at,
            end_at=end_at,
            payload=payload,
        )
        self._events.append(event)
        return event

    def _append_leg(self, kind: LegKind) -> None:
        leg = self._inputs.legs.get(kind)
        if leg is None:
            return
        if self._append(EventKind.TRANSIT, leg.start_at, leg.end_at, _transit_payload(leg)) is None:
            self._skipped.append(f"leg:{kind.value}")

    def _append_hotel(self, hotel: Hotel) -> None:
        tz = self._trip.start_at.tzinfo
        day = self._inputs.day
        check_in = datetime.combine(day, self._settings.hotel_checkin, tzinfo=tz)
        check_out = datetime.combine(day + timedelta(days=1), self._settings.hotel_checkout, tzinfo=tz)
        payload = HotelPayload(hotel_id=hotel.id, name=hotel.name, address=hotel.address)
        if self._append(EventKind.HOTEL, check_in, check_out, payload) is None:
            self._skipped.append(f"hotel:{hotel.id}")

    def _append_span_leg(self, kind: LegKind, span: Optional[Span]) -> None:
        leg = self._inputs.legs.get(kind)
        if leg is None or span is None:
            return
        minutes = (span.end_at - span.start_at).total_seconds() / 60.0
        self._append(EventKind.TRANSIT, span.start_at, span.end_at, _transit_payload(leg, elapsed_minutes=minutes))

    def _append_placement(self, placed: PlacedItem) -> None:
        self._append_span_leg(LegKind.HOTEL_TO_FIRST_STOP, placed.lead)
        item = placed.item
        payload = AttractionPayload(
            item_id=item.id,
            name=item.name,
            category=item.display_category,
            item_kind=item.kind,
        )
        self._append(EventKind.ATTRACTION, placed.start_at, placed.end_at, payload)
        self._append_span_leg(LegKind.LAST_STOP_TO_HOTEL, placed.trail)

    def _pack(self, slot: ConcreteSlot, start_at: datetime, end_at: datetime, queue: ItemQueue) -> ItemQueue:
        result = pack_window(
            start_at,
            end_at,
            queue,
            lead_minutes=_leg_minutes(self._inputs.legs.get(LegKind.HOTEL_TO_FIRST_STOP)),
            trail_minutes=_leg_minutes(self._inputs.legs.get(LegKind.LAST_STOP_TO_HOTEL)),
            venue_minutes=self._settings.venue_minutes,
        )
        for placed in result.placements:
            if placed.clipped:
                _LOGGER.debug("clipped %s to window %s end", placed.item.id, slot.label)
            self._append_placement(placed)
        return result.remaining

    def build(self) -> DayBuild:
        inputs = self._inputs
        attractions = inputs.attractions
        venues = inputs.venues

        if inputs.day_number == 1:
            self._append_leg(LegKind.HOME_TO_HUB)
        if inputs.hotel is not None:
            self._append_leg(LegKind.HUB_TO_HOTEL)
            self._append_hotel(inputs.hotel)

        for slot in instantiate(self._calendar, inputs.day, tz=self._trip.start_at.tzinfo):
            start_at, end_at = self._trip.clamp(slot.start_at, slot.end_at)
            if start_at >= end_at:
                self._skipped.append(f"slot:{slot.label}")
                continue
            if slot.kind == SlotKind.MEAL:
                self._append(EventKind.MEAL, start_at, end_at, MealPayload(meal_type=slot.label))
            elif slot.kind == SlotKind.SLEEP:
                self._append(EventKind.SLEEP, start_at, end_at, SleepPayload(label=slot.label))
            elif slot.kind == SlotKind.AVAILABLE:
                attractions = self._pack(slot, start_at, end_at, attractions)
            elif slot.kind == SlotKind.VENUE:
                venues = self._pack(slot, start_at, end_at, venues)

        if inputs.is_last_day:
            self._append_leg(LegKind.HOTEL_TO_HOME)

        return DayBuild(
            events=tuple(self._events),
            attractions=attractions,
            venues=venues,
            skipped_slots=tuple(self._skipped),
        )


def build_day(
    trip: TripWindow,
    inputs: DayInputs,
    *,
    calendar: AvailabilityCalendar,
    settings: TimelineSettings,
    previous_last: Optional[TimelineEvent] = None,
) -> DayBuild:
    builder = DayEventBuilder(
        trip,
        inputs,
        calendar=calendar,
        settings=settings,
        previous_last=previous_last,
    )
    return builder.build()


__all__ = ["DayBuild", "DayEventBuilder", "DayInputs", "build_day", "event_id"]
