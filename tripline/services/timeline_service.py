"""Application service for timeline build use-cases."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from tripline.config.settings import TimelineSettings, resolve_settings
from tripline.domain.models import TripTimeline, ValidationIssue
from tripline.domain.planning.timeline import TripTimelineBuilder
from tripline.infrastructure.logging import StructuredLogger, get_logger
from tripline.services.request_loader import TripRequest, parse_trip_request, prepare_inputs
from tripline.validators import validate_timeline


class TimelineResult(BaseModel):
    timeline: TripTimeline
    issues: list[ValidationIssue] = Field(default_factory=list)


def _settings_for(request: TripRequest, settings: Optional[TimelineSettings]) -> TimelineSettings:
    if settings is not None:
        return settings
    strategy = request.pool_strategy.value if request.pool_strategy is not None else None
    return resolve_settings(pool_strategy=strategy)


def execute_timeline(
    request: TripRequest | dict[str, Any],
    *,
    settings: Optional[TimelineSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> TimelineResult:
    trip_req = request if isinstance(request, TripRequest) else parse_trip_request(request)
    inputs = prepare_inputs(trip_req)
    log = logger or get_logger()
    builder = TripTimelineBuilder(
        calendar=inputs.calendar,
        settings=_settings_for(trip_req, settings),
        logger=log,
    )
    timeline = builder.build(
        inputs.trip,
        attractions=inputs.attractions,
        venues=inputs.venues,
        hotels=inputs.hotels,
        legs=inputs.legs,
    )
    issues = validate_timeline(timeline)
    log.summary(
        events=len(timeline.events),
        issues=len(issues),
        unresolved=len(timeline.timeline.unresolved_ids),
        dropped=len(timeline.dropped_item_ids),
    )
    return TimelineResult(timeline=timeline, issues=issues)


__all__ = ["TimelineResult", "execute_timeline"]
