"""Static transit leg provider matching legs by exact calendar day."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Optional

from tripline.domain.enums import LegKind
from tripline.domain.models import TransitLeg


class StaticTransitLegProvider:
    """Legs keyed by ``(kind, start date)``; the first supplied leg wins."""

    def __init__(self, legs: Iterable[TransitLeg] = ()):
        self._legs: dict[tuple[LegKind, date], TransitLeg] = {}
        for leg in legs:
            self._legs.setdefault((leg.kind, leg.start_at.date()), leg)

    def find_leg(self, kind: LegKind, day: date) -> Optional[TransitLeg]:
        return self._legs.get((kind, day))
