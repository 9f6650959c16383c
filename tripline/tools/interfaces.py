"""Collaborator protocols consumed by the timeline engine."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, runtime_checkable

from tripline.domain.enums import LegKind
from tripline.domain.models import Hotel, MovableItem, TransitLeg
from tripline.shared.exceptions import ToolError


@runtime_checkable
class AttractionSource(Protocol):
    def list_items(self) -> list[MovableItem]: ...


@runtime_checkable
class HotelSelection(Protocol):
    def hotel_for_day(self, day_number: int) -> Optional[Hotel]: ...


@runtime_checkable
class TransitLegProvider(Protocol):
    def find_leg(self, kind: LegKind, day: date) -> Optional[TransitLeg]: ...


__all__ = [
    "AttractionSource",
    "HotelSelection",
    "TransitLegProvider",
    "ToolError",
]
