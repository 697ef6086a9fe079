"""
Intersection of several people's free time.
"""

from typing import List, Sequence

from .models import AvailabilityStatus, TimeBlock


def free_blocks(statuses: Sequence[AvailabilityStatus]) -> List[TimeBlock]:
    """Extract the free segments of one timeline as time blocks."""
    return [status.to_block() for status in statuses if status.free]


def find_common_free_time(
    status_lists: Sequence[Sequence[AvailabilityStatus]],
) -> List[TimeBlock]:
    """
    Calculate the times when every person is free at once.

    Each entry of ``status_lists`` is one person's free/busy timeline. The
    running intersection is reduced pairwise against each further person;
    the pieces are not re-merged.

    Returns:
        List of TimeBlock objects, empty when there are no timelines
    """
    if not status_lists:
        return []

    result = free_blocks(status_lists[0])

    for statuses in status_lists[1:]:
        result = _intersect_two_lists(result, free_blocks(statuses))

        # Early exit if no common time
        if not result:
            return []

    return result


def _intersect_two_lists(
    list1: Sequence[TimeBlock],
    list2: Sequence[TimeBlock],
) -> List[TimeBlock]:
    intersections: List[TimeBlock] = []

    for block1 in list1:
        for block2 in list2:
            intersection = block1.intersect(block2)
            if intersection:
                intersections.append(intersection)

    return intersections
