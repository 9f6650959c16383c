"""Request document parsing and wiring tests."""

from __future__ import annotations

import json
from datetime import date

import pytest

from tripline.domain.enums import ItemKind, LegKind
from tripline.domain.exceptions import InvalidAvailabilityTemplate
from tripline.services.request_loader import (
    InvalidTripRequest,
    load_trip_request,
    parse_trip_request,
    prepare_inputs,
)
from tripline.shared.exceptions import ToolError


def test_parse_coerces_hotel_day_keys(trip_request_payload):
    request = parse_trip_request(trip_request_payload)
    assert set(request.hotels) == {1, 2}
    assert request.hotels[1].name == "Hotel Baixa"
    assert request.trip.day_count == 2


def test_prepare_inputs_wires_static_adapters(trip_request_payload):
    inputs = prepare_inputs(parse_trip_request(trip_request_payload))
    assert [item.id for item in inputs.attractions.list_items()] == ["belem", "alfama", "oceanario"]
    assert all(item.kind == ItemKind.VENUE for item in inputs.venues.list_items())
    assert inputs.hotels.hotel_for_day(2).id == "h1"
    assert inputs.hotels.hotel_for_day(3) is None
    assert inputs.legs.find_leg(LegKind.HOME_TO_HUB, date(2026, 3, 1)) is not None
    assert inputs.legs.find_leg(LegKind.HOME_TO_HUB, date(2026, 3, 2)) is None
    assert len(inputs.calendar.slots) == 5


def test_custom_calendar_is_used(trip_request_payload):
    trip_request_payload["calendar"] = [
        {"label": "Breakfast", "start": "07:00", "end": "08:00", "kind": "meal"},
    ]
    inputs = prepare_inputs(parse_trip_request(trip_request_payload))
    assert [slot.label for slot in inputs.calendar.slots] == ["Breakfast"]


def test_invalid_calendar_raises_domain_error(trip_request_payload):
    trip_request_payload["calendar"] = [
        {"label": "Late", "start": "23:00", "end": "01:00", "kind": "meal"},
    ]
    with pytest.raises(InvalidAvailabilityTemplate):
        prepare_inputs(parse_trip_request(trip_request_payload))


def test_invalid_attraction_row_raises_tool_error(trip_request_payload):
    trip_request_payload["attractions"].append({"id": "bad", "name": "Bad", "duration_minutes": 0})
    with pytest.raises(ToolError) as exc_info:
        prepare_inputs(parse_trip_request(trip_request_payload))
    assert exc_info.value.tool == "static_catalog"


def test_transit_leg_ending_before_start_is_rejected(trip_request_payload):
    leg = trip_request_payload["transit_legs"][0]
    leg["end_at"] = "2026-03-01T05:00:00"
    with pytest.raises(InvalidTripRequest):
        parse_trip_request(trip_request_payload)


def test_missing_trip_is_rejected():
    with pytest.raises(InvalidTripRequest):
        parse_trip_request({"attractions": []})


def test_load_from_file(tmp_path, trip_request_payload):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(trip_request_payload), encoding="utf-8")
    request = load_trip_request(path)
    assert request.trip.destination_label == "Lisbon"


def test_load_missing_file(tmp_path):
    with pytest.raises(InvalidTripRequest):
        load_trip_request(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidTripRequest):
        load_trip_request(path)


def test_transit_leg_mixing_naive_and_aware_times_is_rejected(trip_request_payload):
    trip_request_payload["transit_legs"][0]["start_at"] = "2026-03-01T06:30:00Z"
    with pytest.raises(InvalidTripRequest):
        parse_trip_request(trip_request_payload)
