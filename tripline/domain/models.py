"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tripline.domain.constants import MINUTES_PER_DAY, VENUE_CATEGORY
from tripline.domain.enums import EventKind, ItemKind, LegKind, Severity, SlotKind, TransportMode
from tripline.domain.exceptions import InvalidAvailabilityTemplate


def minute_of_day(value: dt.time) -> int:
    return value.hour * 60 + value.minute


def is_aware(value: dt.datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


class TripWindow(BaseModel):
    """Absolute bounds of a trip. Validated by the builder, not here."""

    model_config = ConfigDict(frozen=True)

    origin_label: str = ""
    destination_label: str = ""
    start_at: dt.datetime
    end_at: dt.datetime

    @property
    def start_date(self) -> dt.date:
        return self.start_at.date()

    @property
    def end_date(self) -> dt.date:
        return self.end_at.date()

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def date_for_day(self, day_number: int) -> dt.date:
        return self.start_date + dt.timedelta(days=day_number - 1)

    def clamp(self, start: dt.datetime, end: dt.datetime) -> tuple[dt.datetime, dt.datetime]:
        return max(start, self.start_at), min(end, self.end_at)


class AvailabilitySlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    start: dt.time
    end: dt.time
    kind: SlotKind

    @property
    def wraps_midnight(self) -> bool:
        return minute_of_day(self.end) < minute_of_day(self.start)

    def minute_range(self) -> tuple[int, int]:
        start = minute_of_day(self.start)
        end = minute_of_day(self.end)
        if end < start:
            end += MINUTES_PER_DAY
        return start, end


def _ranges_overlap(left: tuple[int, int], right: tuple[int, int]) -> bool:
    for shift in (-MINUTES_PER_DAY, 0, MINUTES_PER_DAY):
        if left[0] < right[1] + shift and right[0] + shift < left[1]:
            return True
    return False


class AvailabilityCalendar(BaseModel):
    """Recurring daily template; slot order is construction order."""

    model_config = ConfigDict(frozen=True)

    slots: tuple[AvailabilitySlot, ...] = ()

    @model_validator(mode="after")
    def _validate_template(self) -> "AvailabilityCalendar":
        for slot in self.slots:
            start = minute_of_day(slot.start)
            end = minute_of_day(slot.end)
            if start == end:
                raise InvalidAvailabilityTemplate(f"slot '{slot.label}' has zero length")
            if end < start and slot.kind != SlotKind.SLEEP:
                raise InvalidAvailabilityTemplate(
                    f"slot '{slot.label}' ends before it starts; only sleep slots may cross midnight"
                )
        for idx, left in enumerate(self.slots):
            for right in self.slots[idx + 1 :]:
                if _ranges_overlap(left.minute_range(), right.minute_range()):
                    raise InvalidAvailabilityTemplate(f"slots '{left.label}' and '{right.label}' overlap")
        return self


class ConcreteSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    kind: SlotKind
    start_at: dt.datetime
    end_at: dt.datetime


class MovableItem(BaseModel):
    """Attraction or venue that can be placed into any compatible window."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: ItemKind = ItemKind.ATTRACTION
    category: str = ""
    duration_minutes: Optional[int] = Field(default=None, gt=0)

    @property
    def display_category(self) -> str:
        if not self.category and self.kind == ItemKind.VENUE:
            return VENUE_CATEGORY
        return self.category


class Hotel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    address: str = ""


class TransitLeg(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: LegKind
    origin: str
    destination: str
    start_at: dt.datetime
    end_at: dt.datetime
    elapsed_minutes: Optional[float] = Field(default=None, ge=0)
    mode: TransportMode = TransportMode.CAR
    distance_km: float = 0.0
    cost: float = 0.0

    @model_validator(mode="after")
    def _check_order(self) -> "TransitLeg":
        if is_aware(self.start_at) != is_aware(self.end_at):
            raise ValueError(f"transit leg {self.kind.value} mixes naive and timezone-aware times")
        if self.end_at < self.start_at:
            raise ValueError(f"transit leg {self.kind.value} ends before it starts")
        return self

    @property
    def elapsed(self) -> dt.timedelta:
        if self.elapsed_minutes is None:
            return self.end_at - self.start_at
        return dt.timedelta(minutes=self.elapsed_minutes)


class TransitPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["transit"] = "transit"
    leg_kind: LegKind
    origin: str
    destination: str
    mode: TransportMode
    elapsed_minutes: float = 0.0


class AttractionPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["attraction"] = "attraction"
    item_id: str
    name: str
    category: str = ""
    item_kind: ItemKind = ItemKind.ATTRACTION


class HotelPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["hotel"] = "hotel"
    hotel_id: str
    name: str
    address: str = ""


class MealPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["meal"] = "meal"
    meal_type: str


class SleepPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["sleep"] = "sleep"
    label: str = ""


EventPayload = Annotated[
    Union[TransitPayload, AttractionPayload, HotelPayload, MealPayload, SleepPayload],
    Field(discriminator="kind"),
]


class TimelineEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    day_number: int
    sequence: int
    dependencies: tuple[str, ...] = ()
    kind: EventKind
    start_at: dt.datetime
    end_at: dt.datetime
    payload: EventPayload

    @model_validator(mode="after")
    def _check_shape(self) -> "TimelineEvent":
        if self.payload.kind != self.kind.value:
            raise ValueError(f"event {self.id}: payload kind {self.payload.kind} != {self.kind.value}")
        if self.end_at < self.start_at:
            raise ValueError(f"event {self.id} ends before it starts")
        return self


class ResolvedTimeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    events: tuple[TimelineEvent, ...] = ()
    unresolved_ids: tuple[str, ...] = ()


class TripTimeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    trip: TripWindow
    timeline: ResolvedTimeline = Field(default_factory=ResolvedTimeline)
    dropped_item_ids: tuple[str, ...] = ()

    @property
    def events(self) -> tuple[TimelineEvent, ...]:
        return self.timeline.events


class ValidationIssue(BaseModel):
    code: str
    severity: Severity = Severity.MEDIUM
    message: str = ""
    day: Optional[int] = None
    event_id: Optional[str] = None


class ErrorResponse(BaseModel):
    error: bool = True
    code: str = "UNKNOWN"
    message: str = ""
    details: list[str] = Field(default_factory=list)
