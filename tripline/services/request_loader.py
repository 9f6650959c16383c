"""Trip request documents: parsing and collaborator wiring."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from tripline.adapters.catalog.static import DayHotelSelection, StaticAttractionSource
from tripline.adapters.transit.static import StaticTransitLegProvider
from tripline.domain.enums import ItemKind, PoolStrategy
from tripline.domain.exceptions import DomainError
from tripline.domain.models import AvailabilityCalendar, Hotel, TransitLeg, TripWindow
from tripline.domain.planning.calendar import calendar_from_rows, default_calendar


class InvalidTripRequest(DomainError):
    """Raised when a request document cannot be parsed."""


class TripRequest(BaseModel):
    trip: TripWindow
    calendar: Optional[list[dict[str, Any]]] = None
    attractions: list[dict[str, Any]] = Field(default_factory=list)
    venues: list[dict[str, Any]] = Field(default_factory=list)
    hotels: dict[int, Hotel] = Field(default_factory=dict)
    transit_legs: list[TransitLeg] = Field(default_factory=list)
    pool_strategy: Optional[PoolStrategy] = None


@dataclass(frozen=True)
class BuildInputs:
    trip: TripWindow
    calendar: AvailabilityCalendar
    attractions: StaticAttractionSource
    venues: StaticAttractionSource
    hotels: DayHotelSelection
    legs: StaticTransitLegProvider
    pool_strategy: Optional[PoolStrategy] = None


def parse_trip_request(payload: Any) -> TripRequest:
    try:
        return TripRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidTripRequest(str(exc)) from exc


def load_trip_request(path: str | Path) -> TripRequest:
    source = Path(path)
    if not source.exists():
        raise InvalidTripRequest(f"Request file not found: {source}")
    with open(source, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidTripRequest(f"Request file is not valid JSON: {exc}") from exc
    return parse_trip_request(payload)


def prepare_inputs(request: TripRequest) -> BuildInputs:
    calendar = calendar_from_rows(request.calendar) if request.calendar else default_calendar()
    return BuildInputs(
        trip=request.trip,
        calendar=calendar,
        attractions=StaticAttractionSource.from_rows(request.attractions, kind=ItemKind.ATTRACTION),
        venues=StaticAttractionSource.from_rows(request.venues, kind=ItemKind.VENUE),
        hotels=DayHotelSelection(request.hotels),
        legs=StaticTransitLegProvider(request.transit_legs),
        pool_strategy=request.pool_strategy,
    )


__all__ = [
    "BuildInputs",
    "InvalidTripRequest",
    "TripRequest",
    "load_trip_request",
    "parse_trip_request",
    "prepare_inputs",
]
