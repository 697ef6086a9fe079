"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_calculator import MutualAvailabilityCalculator
from .busy_subtractor import subtract_busy
from .exceptions import (
    AvailabilityError,
    AvailabilityValidationError,
    DataSourceError,
    EventValidationError,
    InvalidRangeError,
    SlotValidationError,
    ValidationError,
)
from .intersector import find_common_free_time
from .interval_merger import merge_blocks
from .models import Availability, AvailabilityEvent, AvailabilityStatus, TimeBlock, TimeSlot
from .slot_expander import expand_slot

__all__ = [
    "Availability",
    "AvailabilityError",
    "AvailabilityEvent",
    "AvailabilityStatus",
    "AvailabilityValidationError",
    "DataSourceError",
    "EventValidationError",
    "InvalidRangeError",
    "MutualAvailabilityCalculator",
    "SlotValidationError",
    "TimeBlock",
    "TimeSlot",
    "ValidationError",
    "expand_slot",
    "find_common_free_time",
    "merge_blocks",
    "subtract_busy",
]
