"""Validator orchestration."""

from __future__ import annotations

from tripline.domain.models import TripTimeline, ValidationIssue
from tripline.validators.timeline_validator import (
    validate_bounds,
    validate_dependencies,
    validate_item_uniqueness,
    validate_order,
)


def validate_timeline(trip_timeline: TripTimeline) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    issues.extend(validate_bounds(trip_timeline))
    issues.extend(validate_order(trip_timeline))
    issues.extend(validate_dependencies(trip_timeline))
    issues.extend(validate_item_uniqueness(trip_timeline))
    return issues


__all__ = ["validate_timeline"]
