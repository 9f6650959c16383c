"""Domain enums."""

from enum import Enum


class SlotKind(str, Enum):
    SLEEP = "sleep"
    MEAL = "meal"
    AVAILABLE = "available"
    VENUE = "venue"


class EventKind(str, Enum):
    TRANSIT = "transit"
    ATTRACTION = "attraction"
    HOTEL = "hotel"
    MEAL = "meal"
    SLEEP = "sleep"


class LegKind(str, Enum):
    HOME_TO_HUB = "home_to_hub"
    HUB_TO_HOTEL = "hub_to_hotel"
    HOTEL_TO_FIRST_STOP = "hotel_to_first_stop"
    LAST_STOP_TO_HOTEL = "last_stop_to_hotel"
    HOTEL_TO_HOME = "hotel_to_home"


class TransportMode(str, Enum):
    AIRPLANE = "airplane"
    TRAIN = "train"
    BUS = "bus"
    SUBWAY = "subway"
    TAXI = "taxi"
    RIDESHARE = "rideshare"
    WALKING = "walking"
    CYCLING = "cycling"
    CAR = "car"
    FERRY = "ferry"


class ItemKind(str, Enum):
    ATTRACTION = "attraction"
    VENUE = "venue"


class PoolStrategy(str, Enum):
    CHUNKED = "chunked"
    SHARED = "shared"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
