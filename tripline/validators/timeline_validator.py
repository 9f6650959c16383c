"""Timeline validator: invariants every resolved timeline must hold."""

from __future__ import annotations

from tripline.domain.models import AttractionPayload, Severity, TripTimeline, ValidationIssue


def validate_bounds(trip_timeline: TripTimeline) -> list[ValidationIssue]:
    trip = trip_timeline.trip
    issues: list[ValidationIssue] = []
    for event in trip_timeline.events:
        if event.start_at < trip.start_at or event.end_at > trip.end_at:
            issues.append(
                ValidationIssue(
                    code="OUT_OF_BOUNDS",
                    severity=Severity.HIGH,
                    message=f"Event {event.id} lies outside the trip window",
                    day=event.day_number,
                    event_id=event.id,
                )
            )
        if event.end_at <= event.start_at:
            issues.append(
                ValidationIssue(
                    code="INVERTED_EVENT",
                    severity=Severity.HIGH,
                    message=f"Event {event.id} has no positive duration",
                    day=event.day_number,
                    event_id=event.id,
                )
            )
    return issues


def validate_order(trip_timeline: TripTimeline) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    events = trip_timeline.events
    for prev, cur in zip(events, events[1:]):
        if cur.start_at < prev.start_at:
            issues.append(
                ValidationIssue(
                    code="UNSORTED",
                    severity=Severity.HIGH,
                    message=f"Event {cur.id} starts before preceding event {prev.id}",
                    day=cur.day_number,
                    event_id=cur.id,
                )
            )
    return issues


def validate_dependencies(trip_timeline: TripTimeline) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    unresolved = set(trip_timeline.timeline.unresolved_ids)
    seen: set[str] = set()
    for event in trip_timeline.events:
        if event.id in unresolved:
            issues.append(
                ValidationIssue(
                    code="UNRESOLVED_DEPENDENCY",
                    severity=Severity.LOW,
                    message=f"Event {event.id} could not be ordered by its dependencies",
                    day=event.day_number,
                    event_id=event.id,
                )
            )
        else:
            missing = [dep for dep in event.dependencies if dep not in seen]
            if missing:
                issues.append(
                    ValidationIssue(
                        code="DEPENDENCY_ORDER",
                        severity=Severity.HIGH,
                        message=f"Event {event.id} precedes its dependencies {','.join(missing)}",
                        day=event.day_number,
                        event_id=event.id,
                    )
                )
        seen.add(event.id)
    return issues


def validate_item_uniqueness(trip_timeline: TripTimeline) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    placed: set[str] = set()
    for event in trip_timeline.events:
        payload = event.payload
        if not isinstance(payload, AttractionPayload):
            continue
        if payload.item_id in placed:
            issues.append(
                ValidationIssue(
                    code="DUPLICATE_ITEM",
                    severity=Severity.HIGH,
                    message=f"Item {payload.item_id} is scheduled more than once",
                    day=event.day_number,
                    event_id=event.id,
                )
            )
        placed.add(payload.item_id)
    return issues
