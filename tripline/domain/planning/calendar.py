"""Availability calendar: recurring day template and per-date instantiation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Optional

from pydantic import ValidationError

from tripline.domain.enums import SlotKind
from tripline.domain.exceptions import InvalidAvailabilityTemplate
from tripline.domain.models import AvailabilityCalendar, AvailabilitySlot, ConcreteSlot

_DEFAULT_ROWS: tuple[tuple[str, str, str, SlotKind], ...] = (
    ("Hotel Overnight", "19:00", "10:00", SlotKind.SLEEP),
    ("Attraction Morning", "10:00", "12:00", SlotKind.AVAILABLE),
    ("Attraction Afternoon", "13:00", "17:00", SlotKind.AVAILABLE),
    ("Venue Lunch", "12:00", "13:00", SlotKind.VENUE),
    ("Venue Evening", "17:00", "19:00", SlotKind.VENUE),
)


def default_calendar() -> AvailabilityCalendar:
    """Built-in template. Independent of the current date."""
    return AvailabilityCalendar(
        slots=tuple(
            AvailabilitySlot(label=label, start=start, end=end, kind=kind)
            for label, start, end, kind in _DEFAULT_ROWS
        )
    )


def calendar_from_rows(rows: Iterable[Mapping[str, Any]]) -> AvailabilityCalendar:
    try:
        slots = tuple(AvailabilitySlot.model_validate(dict(row)) for row in rows)
        return AvailabilityCalendar(slots=slots)
    except ValidationError as exc:
        raise InvalidAvailabilityTemplate(str(exc)) from exc


def instantiate(
    calendar: AvailabilityCalendar,
    day: date,
    *,
    tz: Optional[tzinfo] = None,
) -> list[ConcreteSlot]:
    rows: list[ConcreteSlot] = []
    for slot in calendar.slots:
        start_at = datetime.combine(day, slot.start, tzinfo=tz)
        end_day = day + timedelta(days=1) if slot.wraps_midnight else day
        end_at = datetime.combine(end_day, slot.end, tzinfo=tz)
        rows.append(ConcreteSlot(label=slot.label, kind=slot.kind, start_at=start_at, end_at=end_at))
    return rows


__all__ = ["calendar_from_rows", "default_calendar", "instantiate"]
