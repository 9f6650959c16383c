"""Dependency resolution over a finite event set."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence
from datetime import datetime

from tripline.domain.models import ResolvedTimeline, TimelineEvent

_LOGGER = logging.getLogger("tripline.resolver")


def _priority(event: TimelineEvent, index: int) -> tuple[datetime, int]:
    return event.start_at, index


def resolve_dependencies(events: Sequence[TimelineEvent]) -> ResolvedTimeline:
    """Order ``events`` so dependencies come first, then sort by start.

    Among ready events the earliest start wins, generation order breaks
    ties. Events whose dependencies can never complete (a cycle or an id
    that was never produced) are appended in generation order and reported
    in ``unresolved_ids``. The final pass is a stable sort by ``start_at``.
    """
    index_of = {event.id: idx for idx, event in enumerate(events)}
    waiting_on: dict[str, int] = {}
    dependents: dict[str, list[int]] = {}
    ready: list[tuple[datetime, int]] = []

    for idx, event in enumerate(events):
        deps = set(event.dependencies)
        waiting_on[event.id] = len(deps)
        for dep in deps:
            dependents.setdefault(dep, []).append(idx)
        if not deps:
            heapq.heappush(ready, _priority(event, idx))

    resolved: list[TimelineEvent] = []
    completed_ids: set[str] = set()
    while ready:
        _, idx = heapq.heappop(ready)
        event = events[idx]
        resolved.append(event)
        completed_ids.add(event.id)
        for child_idx in dependents.get(event.id, ()):
            child = events[child_idx]
            waiting_on[child.id] -= 1
            if waiting_on[child.id] == 0:
                heapq.heappush(ready, _priority(child, child_idx))

    remaining = [event for event in events if event.id not in completed_ids]
    unresolved_ids = tuple(event.id for event in remaining)
    if unresolved_ids:
        dangling = sorted({dep for event in remaining for dep in event.dependencies if dep not in index_of})
        _LOGGER.warning(
            "unresolvable dependencies for %d events (dangling=%s)",
            len(unresolved_ids),
            ",".join(dangling) or "-",
        )
    resolved.extend(remaining)
    ordered = sorted(resolved, key=lambda event: event.start_at)
    return ResolvedTimeline(events=tuple(ordered), unresolved_ids=unresolved_ids)


__all__ = ["resolve_dependencies"]
