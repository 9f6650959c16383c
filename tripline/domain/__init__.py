"""Domain package exports."""

from tripline.domain.constants import DEFAULT_VENUE_MINUTES, HOTEL_CHECKIN_TIME, HOTEL_CHECKOUT_TIME
from tripline.domain.enums import EventKind, ItemKind, LegKind, PoolStrategy, Severity, SlotKind, TransportMode
from tripline.domain.exceptions import DomainError, InvalidAvailabilityTemplate, InvalidTripWindow
from tripline.domain.models import (
    AttractionPayload,
    AvailabilityCalendar,
    AvailabilitySlot,
    ConcreteSlot,
    ErrorResponse,
    Hotel,
    HotelPayload,
    MealPayload,
    MovableItem,
    ResolvedTimeline,
    SleepPayload,
    TimelineEvent,
    TransitLeg,
    TransitPayload,
    TripTimeline,
    TripWindow,
    ValidationIssue,
)

__all__ = [
    "AttractionPayload",
    "AvailabilityCalendar",
    "AvailabilitySlot",
    "ConcreteSlot",
    "DomainError",
    "ErrorResponse",
    "Hotel",
    "HotelPayload",
    "InvalidAvailabilityTemplate",
    "InvalidTripWindow",
    "MealPayload",
    "MovableItem",
    "ResolvedTimeline",
    "SleepPayload",
    "TimelineEvent",
    "TransitLeg",
    "TransitPayload",
    "TripTimeline",
    "TripWindow",
    "ValidationIssue",
    "EventKind",
    "ItemKind",
    "LegKind",
    "PoolStrategy",
    "Severity",
    "SlotKind",
    "TransportMode",
    "DEFAULT_VENUE_MINUTES",
    "HOTEL_CHECKIN_TIME",
    "HOTEL_CHECKOUT_TIME",
]
