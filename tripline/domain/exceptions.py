"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class InvalidTripWindow(DomainError):
    """Raised when the trip window cannot bound a timeline."""


class InvalidAvailabilityTemplate(DomainError, ValueError):
    """Raised when an availability calendar template is malformed."""
