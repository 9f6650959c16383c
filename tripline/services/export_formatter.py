"""Timeline export renderers."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from datetime import datetime
from itertools import groupby
from typing import Any

from tripline.domain.models import (
    AttractionPayload,
    HotelPayload,
    MealPayload,
    SleepPayload,
    TimelineEvent,
    TransitPayload,
    TripTimeline,
)

# TODO: XML import (document -> TripTimeline) once event ids survive a round trip.

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")


def _safe_text(value: Any) -> str:
    return _XML_ILLEGAL.sub("", str(value or "")).strip()


def _inline(value: Any) -> str:
    return _safe_text(value).replace("\n", " ").replace("\r", " ")


def _events_by_day(events: Iterable[TimelineEvent]) -> list[tuple[int, list[TimelineEvent]]]:
    rows = sorted(events, key=lambda event: (event.day_number, event.sequence))
    return [(day, list(group)) for day, group in groupby(rows, key=lambda event: event.day_number)]


def _text_child(parent: ET.Element, tag: str, text: Any) -> None:
    ET.SubElement(parent, tag).text = _safe_text(text)


def _payload_children(node: ET.Element, event: TimelineEvent) -> None:
    payload = event.payload
    if isinstance(payload, TransitPayload):
        _text_child(node, "from", payload.origin)
        _text_child(node, "to", payload.destination)
        _text_child(node, "mode", payload.mode.value)
    elif isinstance(payload, AttractionPayload):
        _text_child(node, "name", payload.name)
        _text_child(node, "category", payload.category)
    elif isinstance(payload, HotelPayload):
        _text_child(node, "name", payload.name)
        _text_child(node, "address", payload.address)
    elif isinstance(payload, MealPayload):
        _text_child(node, "meal-type", payload.meal_type)
    elif isinstance(payload, SleepPayload):
        pass
    else:
        raise TypeError(f"unsupported payload: {type(payload).__name__}")


def build_timeline_element(trip_timeline: TripTimeline) -> ET.Element:
    trip = trip_timeline.trip
    root = ET.Element("trip-timeline")
    ET.SubElement(
        root,
        "trip-info",
        {
            "origin": _safe_text(trip.origin_label),
            "destination": _safe_text(trip.destination_label),
            "start-date": trip.start_date.isoformat(),
            "end-date": trip.end_date.isoformat(),
            "start-time": _hhmm(trip.start_at),
            "end-time": _hhmm(trip.end_at),
        },
    )
    events_node = ET.SubElement(root, "timeline-events")
    for day_number, events in _events_by_day(trip_timeline.events):
        day_node = ET.SubElement(
            events_node,
            "day",
            {"number": str(day_number), "date": trip.date_for_day(day_number).isoformat()},
        )
        for event in events:
            event_node = ET.SubElement(
                day_node,
                "event",
                {
                    "id": event.id,
                    "type": event.kind.value,
                    "sequence": str(event.sequence),
                    "dependencies": ",".join(event.dependencies),
                },
            )
            _payload_children(event_node, event)
            _text_child(event_node, "start-time", _hhmm(event.start_at))
            _text_child(event_node, "end-time", _hhmm(event.end_at))
    unresolved = trip_timeline.timeline.unresolved_ids
    if unresolved:
        unresolved_node = ET.SubElement(root, "unresolved")
        for event_id in unresolved:
            ET.SubElement(unresolved_node, "event-ref", {"id": event_id})
    return root


def export_timeline_xml(trip_timeline: TripTimeline) -> str:
    root = build_timeline_element(trip_timeline)
    ET.indent(root, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"


def _event_title(event: TimelineEvent) -> str:
    payload = event.payload
    if isinstance(payload, TransitPayload):
        return f"{_inline(payload.origin)} -> {_inline(payload.destination)} ({payload.mode.value}, {int(payload.elapsed_minutes)}m)"
    if isinstance(payload, AttractionPayload):
        category = _inline(payload.category)
        return f"{_inline(payload.name)} [{category}]" if category else _inline(payload.name)
    if isinstance(payload, HotelPayload):
        return f"Check-in: {_inline(payload.name)}"
    if isinstance(payload, MealPayload):
        return _inline(payload.meal_type)
    if isinstance(payload, SleepPayload):
        return "Sleep"
    raise TypeError(f"unsupported payload: {type(payload).__name__}")


def render_timeline_markdown(trip_timeline: TripTimeline) -> str:
    trip = trip_timeline.trip
    route = " -> ".join(part for part in (_inline(trip.origin_label), _inline(trip.destination_label)) if part)
    title = f"# Trip Timeline - {route}" if route else "# Trip Timeline"
    lines: list[str] = [
        title,
        "",
        f"- start: `{trip.start_at.strftime('%Y-%m-%d %H:%M')}`",
        f"- end: `{trip.end_at.strftime('%Y-%m-%d %H:%M')}`",
        f"- days: `{trip.day_count}`",
        f"- events: `{len(trip_timeline.events)}`",
        "",
    ]
    grouped = dict(_events_by_day(trip_timeline.events))
    for day_number in range(1, trip.day_count + 1):
        lines.append(f"## Day {day_number} ({trip.date_for_day(day_number).isoformat()})")
        day_events = grouped.get(day_number, [])
        if not day_events:
            lines.append("- No events")
        for event in day_events:
            lines.append(f"- {_hhmm(event.start_at)}-{_hhmm(event.end_at)} {event.kind.value}: {_event_title(event)}")
        lines.append("")

    if trip_timeline.timeline.unresolved_ids:
        lines.append("## Unresolved")
        for event_id in trip_timeline.timeline.unresolved_ids:
            lines.append(f"- {event_id}")
        lines.append("")

    if trip_timeline.dropped_item_ids:
        lines.append("## Not Scheduled")
        for item_id in trip_timeline.dropped_item_ids:
            lines.append(f"- {item_id}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


__all__ = ["build_timeline_element", "export_timeline_xml", "render_timeline_markdown"]
