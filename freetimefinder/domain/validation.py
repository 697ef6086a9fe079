"""
Ingestion checks for availability records.

The engine itself tolerates overlapping slots within a record and merges
them; these stricter checks apply where records enter the system.
"""

from typing import Sequence

from .exceptions import AvailabilityValidationError, SlotValidationError
from .models import Availability, TimeSlot

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def validate_time_slot(slot: TimeSlot) -> None:
    """
    Re-run the slot invariants.

    Raises:
        SlotValidationError: If the slot is malformed
    """
    if not isinstance(slot, TimeSlot):
        raise SlotValidationError(f"Expected a TimeSlot, got {type(slot).__name__}")
    # Construction performs the full range and ordering checks
    TimeSlot(slot.day_of_week, slot.start_time, slot.end_time)


def check_slot_overlaps(slots: Sequence[TimeSlot]) -> None:
    """
    Ensure no two slots on the same weekday overlap.

    Raises:
        SlotValidationError: Naming the first overlapping pair
    """
    for i, first in enumerate(slots):
        for second in slots[i + 1:]:
            if first.overlaps(second):
                raise SlotValidationError(
                    f"Overlapping slots: {first.format_display()} and {second.format_display()}"
                )


def validate_availability(availability: Availability) -> None:
    """
    Validate an availability record before it is accepted.

    Raises:
        AvailabilityValidationError: If title, description or slot count is invalid
        SlotValidationError: If a slot is malformed or two slots overlap
    """
    if not 1 <= len(availability.title) <= MAX_TITLE_LENGTH:
        raise AvailabilityValidationError(
            f"Availability '{availability.id}': title must be 1-{MAX_TITLE_LENGTH} characters"
        )

    if len(availability.description) > MAX_DESCRIPTION_LENGTH:
        raise AvailabilityValidationError(
            f"Availability '{availability.id}': description must be "
            f"0-{MAX_DESCRIPTION_LENGTH} characters"
        )

    if not availability.slots:
        raise AvailabilityValidationError(
            f"Availability '{availability.id}': at least 1 slot is required"
        )

    for slot in availability.slots:
        validate_time_slot(slot)

    check_slot_overlaps(availability.slots)
