"""
Expansion of recurring weekly slots into concrete time blocks.
"""

from pendulum import DateTime

from .models import TimeBlock, TimeSlot


def sunday_based_weekday(date: DateTime) -> int:
    """Return the weekday of ``date`` with 0=Sunday, 6=Saturday."""
    return date.isoweekday() % 7


def expand_slot(slot: TimeSlot, date: DateTime) -> TimeBlock | None:
    """
    Anchor a recurring slot to a specific calendar date.

    The slot minutes are applied as wall-clock time on the day of ``date`` in
    ``date``'s own timezone; no timezone conversion takes place.

    Args:
        slot: The recurring weekly slot
        date: Any instant on the calendar day to expand for

    Returns:
        TimeBlock for that day, or None if the slot applies to another weekday
    """
    if sunday_based_weekday(date) != slot.day_of_week:
        return None

    day = date.start_of("day")
    start = day.set(hour=slot.start_time // 60, minute=slot.start_time % 60)
    end = day.set(hour=slot.end_time // 60, minute=slot.end_time % 60)

    return TimeBlock(start=start, end=end)
