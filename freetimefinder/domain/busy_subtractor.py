"""
Subtraction of busy event blocks from availability blocks.
"""

from typing import List, Sequence

from .models import AvailabilityStatus, TimeBlock


def subtract_busy(
    availability_blocks: Sequence[TimeBlock],
    event_blocks: Sequence[TimeBlock],
) -> List[AvailabilityStatus]:
    """
    Label every availability block as a sequence of free and busy segments.

    Each availability block is processed independently. Events that overlap
    it are walked in start order and clipped to the block, so the segments
    of one block always add up to the block's duration.

    Example:
    Availability: 09:00 - 17:00
    Events: [10:00-11:00]
    Result: [09:00-10:00 free, 10:00-11:00 busy, 11:00-17:00 free]

    Args:
        availability_blocks: Merged availability blocks
        event_blocks: Busy blocks, in any order

    Returns:
        Ordered list of AvailabilityStatus segments
    """
    result: List[AvailabilityStatus] = []

    for block in availability_blocks:
        overlapping = sorted(
            (event for event in event_blocks if block.overlaps(event)),
            key=lambda e: e.start,
        )
        result.extend(_segment_block(block, overlapping))

    return result


def _segment_block(
    block: TimeBlock,
    overlapping_events: Sequence[TimeBlock],
) -> List[AvailabilityStatus]:
    segments: List[AvailabilityStatus] = []
    cursor = block.start

    for event in overlapping_events:
        # Free time before this event
        if cursor < event.start:
            segments.append(AvailabilityStatus(start=cursor, end=event.start, free=True))

        busy_start = max(cursor, event.start)
        busy_end = min(block.end, event.end)

        # Nothing left to mark when an earlier event already covers this one
        if busy_start < busy_end:
            segments.append(AvailabilityStatus(start=busy_start, end=busy_end, free=False))

        cursor = max(cursor, event.end)

    if cursor < block.end:
        segments.append(AvailabilityStatus(start=cursor, end=block.end, free=True))

    return segments
