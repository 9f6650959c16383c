"""pytest 全局 fixtures：测试环境隔离"""

import io

import pytest

from tripline.infrastructure.logging import StructuredLogger, reset_logger


@pytest.fixture(autouse=True)
def no_env_overrides(monkeypatch):
    """默认清除 TRIPLINE_* 环境变量，确保测试使用内置默认值"""
    monkeypatch.delenv("TRIPLINE_HOTEL_CHECKIN", raising=False)
    monkeypatch.delenv("TRIPLINE_HOTEL_CHECKOUT", raising=False)
    monkeypatch.delenv("TRIPLINE_VENUE_MINUTES", raising=False)
    monkeypatch.delenv("TRIPLINE_POOL_STRATEGY", raising=False)
    # 重置全局 logger，避免持有已关闭的 stderr
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def log_buffer():
    return io.StringIO()


@pytest.fixture
def quiet_logger(log_buffer):
    return StructuredLogger(trace_id="test", output=log_buffer)


@pytest.fixture
def trip_request_payload():
    """两天行程请求：每天同一酒店，含往返交通与景点/场馆"""
    return {
        "trip": {
            "origin_label": "Home",
            "destination_label": "Lisbon",
            "start_at": "2026-03-01T06:00:00",
            "end_at": "2026-03-02T22:00:00",
        },
        "attractions": [
            {"id": "belem", "name": "Belem Tower", "category": "monument", "duration_minutes": 90},
            {"id": "alfama", "name": "Alfama Walk", "duration_minutes": 120},
            {"id": "oceanario", "name": "Oceanario", "category": "aquarium"},
        ],
        "venues": [
            {"id": "fado", "name": "Fado House"},
        ],
        "hotels": {
            "1": {"id": "h1", "name": "Hotel Baixa", "address": "Rua Augusta 1"},
            "2": {"id": "h1", "name": "Hotel Baixa", "address": "Rua Augusta 1"},
        },
        "transit_legs": [
            {
                "kind": "home_to_hub",
                "origin": "Home",
                "destination": "LIS",
                "start_at": "2026-03-01T06:30:00",
                "end_at": "2026-03-01T08:30:00",
                "mode": "airplane",
            },
            {
                "kind": "hub_to_hotel",
                "origin": "LIS",
                "destination": "Hotel Baixa",
                "start_at": "2026-03-01T09:00:00",
                "end_at": "2026-03-01T09:40:00",
                "mode": "taxi",
            },
            {
                "kind": "hotel_to_home",
                "origin": "Hotel Baixa",
                "destination": "Home",
                "start_at": "2026-03-02T20:00:00",
                "end_at": "2026-03-02T21:30:00",
                "mode": "airplane",
            },
        ],
    }
