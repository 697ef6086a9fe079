"""
Domain-specific exception hierarchy for the free time finder.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class ValidationError(AvailabilityError, ValueError):
    """Raised when input data violates a domain invariant."""


class SlotValidationError(ValidationError):
    """Raised when a recurring time slot is malformed."""


class EventValidationError(ValidationError):
    """Raised when a calendar event has no positive duration."""


class AvailabilityValidationError(ValidationError):
    """Raised when an availability record fails ingestion checks."""


class InvalidRangeError(ValidationError):
    """Raised when a query range ends before it starts."""


class DataSourceError(AvailabilityError):
    """Raised when availability or event data cannot be read or parsed."""
