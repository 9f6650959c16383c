"""Per-day event construction tests."""

from __future__ import annotations

from datetime import date, datetime, time

from tripline.config.settings import TimelineSettings
from tripline.domain.enums import EventKind, ItemKind, LegKind, SlotKind
from tripline.domain.models import (
    AvailabilityCalendar,
    AvailabilitySlot,
    Hotel,
    MovableItem,
    TransitLeg,
    TripWindow,
)
from tripline.domain.planning.calendar import default_calendar
from tripline.domain.planning.events import DayInputs, build_day, event_id
from tripline.domain.planning.packing import ItemQueue

DAY = date(2026, 3, 1)


def _trip(end: datetime = datetime(2026, 3, 1, 22, 0)) -> TripWindow:
    return TripWindow(
        origin_label="Home",
        destination_label="Lisbon",
        start_at=datetime(2026, 3, 1, 6, 0),
        end_at=end,
    )


def _leg(kind: LegKind, start: datetime, end: datetime) -> TransitLeg:
    return TransitLeg(kind=kind, origin="A", destination="B", start_at=start, end_at=end)


def _item(item_id: str, minutes: int, kind: ItemKind = ItemKind.ATTRACTION) -> MovableItem:
    return MovableItem(id=item_id, name=item_id, kind=kind, duration_minutes=minutes)


def _build(inputs: DayInputs, *, trip: TripWindow | None = None, calendar=None, settings=None, previous_last=None):
    return build_day(
        trip or _trip(),
        inputs,
        calendar=calendar or default_calendar(),
        settings=settings or TimelineSettings(),
        previous_last=previous_last,
    )


def test_event_id_format():
    assert event_id(1, 1) == "d1-001"
    assert event_id(12, 34) == "d12-034"


def test_sequence_is_contiguous_and_ids_follow_it():
    inputs = DayInputs(
        day_number=1,
        day=DAY,
        is_last_day=True,
        attractions=ItemQueue.of([_item("a1", 90), _item("a2", 90)]),
    )
    result = _build(inputs)
    assert [e.sequence for e in result.events] == list(range(1, len(result.events) + 1))
    assert [e.id for e in result.events] == [event_id(1, e.sequence) for e in result.events]


def test_hotel_times_come_from_the_day_and_settings():
    inputs = DayInputs(
        day_number=1,
        day=DAY,
        is_last_day=False,
        hotel=Hotel(id="h1", name="Hotel Sol", address="Rua 1"),
    )
    trip = _trip(end=datetime(2026, 3, 3, 22, 0))
    settings = TimelineSettings(hotel_checkin=time(14, 0), hotel_checkout=time(10, 30))
    result = _build(inputs, trip=trip, settings=settings)
    hotels = [e for e in result.events if e.kind == EventKind.HOTEL]
    assert len(hotels) == 1
    assert hotels[0].start_at == datetime(2026, 3, 1, 14, 0)
    assert hotels[0].end_at == datetime(2026, 3, 2, 10, 30)
    assert hotels[0].payload.name == "Hotel Sol"


def test_hotel_stay_is_clamped_to_trip_end():
    inputs = DayInputs(day_number=1, day=DAY, is_last_day=True, hotel=Hotel(id="h1", name="Hotel Sol"))
    result = _build(inputs)
    hotel = next(e for e in result.events if e.kind == EventKind.HOTEL)
    assert hotel.end_at == datetime(2026, 3, 1, 22, 0)


def test_day_one_starts_with_home_to_hub_then_hub_to_hotel():
    legs = {
        LegKind.HOME_TO_HUB: _leg(LegKind.HOME_TO_HUB, datetime(2026, 3, 1, 6, 30), datetime(2026, 3, 1, 8, 30)),
        LegKind.HUB_TO_HOTEL: _leg(LegKind.HUB_TO_HOTEL, datetime(2026, 3, 1, 9, 0), datetime(2026, 3, 1, 9, 40)),
    }
    inputs = DayInputs(day_number=1, day=DAY, is_last_day=False, hotel=Hotel(id="h1", name="H"), legs=legs)
    result = _build(inputs, trip=_trip(end=datetime(2026, 3, 2, 22, 0)))
    first, second, third = result.events[:3]
    assert first.payload.leg_kind == LegKind.HOME_TO_HUB
    assert second.payload.leg_kind == LegKind.HUB_TO_HOTEL
    assert third.kind == EventKind.HOTEL
    assert first.dependencies == ()
    assert second.dependencies == ("d1-001",)


def test_hub_to_hotel_needs_a_hotel():
    legs = {LegKind.HUB_TO_HOTEL: _leg(LegKind.HUB_TO_HOTEL, datetime(2026, 3, 1, 9, 0), datetime(2026, 3, 1, 9, 40))}
    result = _build(DayInputs(day_number=1, day=DAY, is_last_day=True, legs=legs))
    assert all(e.kind != EventKind.TRANSIT for e in result.events)


def test_home_return_only_on_last_day():
    leg = _leg(LegKind.HOTEL_TO_HOME, datetime(2026, 3, 1, 20, 0), datetime(2026, 3, 1, 21, 30))
    not_last = _build(DayInputs(day_number=1, day=DAY, is_last_day=False, legs={LegKind.HOTEL_TO_HOME: leg}))
    last = _build(DayInputs(day_number=1, day=DAY, is_last_day=True, legs={LegKind.HOTEL_TO_HOME: leg}))
    assert all(e.kind != EventKind.TRANSIT for e in not_last.events)
    assert last.events[-1].payload.leg_kind == LegKind.HOTEL_TO_HOME


def test_placements_are_wrapped_by_hotel_transit():
    legs = {
        LegKind.HOTEL_TO_FIRST_STOP: _leg(
            LegKind.HOTEL_TO_FIRST_STOP, datetime(2026, 3, 1, 9, 40), datetime(2026, 3, 1, 10, 0)
        ),
        LegKind.LAST_STOP_TO_HOTEL: _leg(
            LegKind.LAST_STOP_TO_HOTEL, datetime(2026, 3, 1, 17, 0), datetime(2026, 3, 1, 17, 20)
        ),
    }
    calendar = AvailabilityCalendar(
        slots=(AvailabilitySlot(label="Morning", start="10:00", end="12:00", kind=SlotKind.AVAILABLE),)
    )
    inputs = DayInputs(
        day_number=1,
        day=DAY,
        is_last_day=True,
        legs=legs,
        attractions=ItemQueue.of([_item("a1", 60)]),
    )
    result = _build(inputs, calendar=calendar)
    assert [e.kind for e in result.events] == [EventKind.TRANSIT, EventKind.ATTRACTION, EventKind.TRANSIT]
    lead, visit, trail = result.events
    assert lead.payload.leg_kind == LegKind.HOTEL_TO_FIRST_STOP
    assert lead.end_at == visit.start_at == datetime(2026, 3, 1, 10, 20)
    assert trail.payload.leg_kind == LegKind.LAST_STOP_TO_HOTEL
    assert trail.start_at == visit.end_at
    assert trail.payload.elapsed_minutes == 20.0


def test_meal_and_sleep_slots_emit_fixed_events():
    calendar = AvailabilityCalendar(
        slots=(
            AvailabilitySlot(label="Sleep", start="22:00", end="07:00", kind=SlotKind.SLEEP),
            AvailabilitySlot(label="Lunch", start="12:00", end="13:00", kind=SlotKind.MEAL),
        )
    )
    trip = _trip(end=datetime(2026, 3, 2, 12, 0))
    result = _build(DayInputs(day_number=1, day=DAY, is_last_day=False), trip=trip, calendar=calendar)
    sleep, lunch = result.events
    assert sleep.kind == EventKind.SLEEP
    assert sleep.end_at == datetime(2026, 3, 2, 7, 0)
    assert lunch.kind == EventKind.MEAL
    assert lunch.payload.meal_type == "Lunch"


def test_slots_outside_trip_are_skipped():
    trip = TripWindow(start_at=datetime(2026, 3, 1, 14, 0), end_at=datetime(2026, 3, 1, 16, 0))
    inputs = DayInputs(day_number=1, day=DAY, is_last_day=True, attractions=ItemQueue.of([_item("a1", 300)]))
    result = _build(inputs, trip=trip)
    assert "slot:Attraction Morning" in result.skipped_slots
    visit = next(e for e in result.events if e.kind == EventKind.ATTRACTION)
    assert visit.start_at == datetime(2026, 3, 1, 14, 0)
    assert visit.end_at == datetime(2026, 3, 1, 16, 0)


def test_venues_fill_venue_windows_with_default_category():
    inputs = DayInputs(
        day_number=1,
        day=DAY,
        is_last_day=True,
        venues=ItemQueue.of([MovableItem(id="v1", name="Bar", kind=ItemKind.VENUE)]),
    )
    result = _build(inputs, settings=TimelineSettings(venue_minutes=30))
    venue = next(e for e in result.events if e.kind == EventKind.ATTRACTION)
    assert venue.start_at == datetime(2026, 3, 1, 12, 0)
    assert venue.end_at == datetime(2026, 3, 1, 12, 30)
    assert venue.payload.item_kind == ItemKind.VENUE
    assert venue.payload.category == "venue"
    assert len(result.venues) == 0


def test_dependencies_point_to_earlier_events_that_start_no_later():
    inputs = DayInputs(
        day_number=1,
        day=DAY,
        is_last_day=True,
        attractions=ItemQueue.of([_item("a1", 90), _item("a2", 90)]),
    )
    result = _build(inputs)
    by_id = {e.id: e for e in result.events}
    for event in result.events:
        for dep in event.dependencies:
            assert by_id[dep].sequence < event.sequence
            assert by_id[dep].start_at <= event.start_at


def test_first_event_depends_on_previous_day_last_event():
    day_one = _build(
        DayInputs(day_number=1, day=DAY, is_last_day=False, attractions=ItemQueue.of([_item("a1", 60)])),
        trip=_trip(end=datetime(2026, 3, 2, 22, 0)),
    )
    previous_last = day_one.events[-1]
    day_two = _build(
        DayInputs(day_number=2, day=date(2026, 3, 2), is_last_day=True),
        trip=_trip(end=datetime(2026, 3, 2, 22, 0)),
        previous_last=previous_last,
    )
    assert day_two.events[0].id == "d2-001"
    assert day_two.events[0].dependencies == (previous_last.id,)
