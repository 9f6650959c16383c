"""Runtime settings snapshot for timeline builds."""

from __future__ import annotations

import os
from datetime import time

from pydantic import BaseModel, Field

from tripline.domain.constants import DEFAULT_VENUE_MINUTES, HOTEL_CHECKIN_TIME, HOTEL_CHECKOUT_TIME
from tripline.domain.enums import PoolStrategy


def _is_configured(value: str | None) -> bool:
    return bool(value and value.strip())


def _parse_clock(value: str | None, default: time) -> time:
    if not _is_configured(value):
        return default
    try:
        hh, mm = str(value).strip().split(":", 1)
        return time(hour=int(hh), minute=int(mm))
    except ValueError:
        return default


def _parse_positive_int(value: str | None, default: int) -> int:
    if not _is_configured(value):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def resolve_pool_strategy(value: str | None = None) -> PoolStrategy:
    raw = str(value if value is not None else os.getenv("TRIPLINE_POOL_STRATEGY") or "").strip().lower()
    if raw in {item.value for item in PoolStrategy}:
        return PoolStrategy(raw)
    return PoolStrategy.CHUNKED


class TimelineSettings(BaseModel):
    hotel_checkin: time = Field(default=HOTEL_CHECKIN_TIME)
    hotel_checkout: time = Field(default=HOTEL_CHECKOUT_TIME)
    venue_minutes: int = Field(default=DEFAULT_VENUE_MINUTES, gt=0)
    pool_strategy: PoolStrategy = Field(default=PoolStrategy.CHUNKED)


def resolve_settings(*, pool_strategy: str | None = None) -> TimelineSettings:
    return TimelineSettings(
        hotel_checkin=_parse_clock(os.getenv("TRIPLINE_HOTEL_CHECKIN"), HOTEL_CHECKIN_TIME),
        hotel_checkout=_parse_clock(os.getenv("TRIPLINE_HOTEL_CHECKOUT"), HOTEL_CHECKOUT_TIME),
        venue_minutes=_parse_positive_int(os.getenv("TRIPLINE_VENUE_MINUTES"), DEFAULT_VENUE_MINUTES),
        pool_strategy=resolve_pool_strategy(pool_strategy),
    )


__all__ = [
    "TimelineSettings",
    "resolve_pool_strategy",
    "resolve_settings",
]
