"""
Merging of overlapping or touching time blocks.
"""

from typing import Iterable, List

from .models import TimeBlock


def merge_blocks(blocks: Iterable[TimeBlock]) -> List[TimeBlock]:
    """
    Merge overlapping or adjacent time blocks.

    Input order is irrelevant. The result is sorted by start and no two
    blocks in it overlap or touch.

    Example: [09:00-10:00, 10:00-11:00, 13:00-14:00] -> [09:00-11:00, 13:00-14:00]
    """
    sorted_blocks = sorted(blocks, key=lambda b: b.start)

    if not sorted_blocks:
        return []

    merged: List[TimeBlock] = [sorted_blocks[0]]

    for current in sorted_blocks[1:]:
        last = merged[-1]

        # Touching counts as overlap
        if current.start <= last.end:
            if current.end > last.end:
                merged[-1] = TimeBlock(start=last.start, end=current.end)
        else:
            merged.append(current)

    return merged
