"""
Duration and display helpers for rendering free time suggestions.
"""

from typing import Any, Dict, Iterable, List, Sequence, Union

from .models import AvailabilityStatus, TimeBlock

Block = Union[TimeBlock, AvailabilityStatus]

DEFAULT_SUGGESTION_LIMIT = 10


def block_duration_minutes(block: Block) -> int:
    """Return the length of a block in whole minutes."""
    return block.duration_minutes()


def format_duration(minutes: int) -> str:
    """
    Format a duration compactly.

    Examples: 45 -> "45min", 120 -> "2h", 90 -> "1h 30min"
    """
    hours, mins = divmod(minutes, 60)

    if hours == 0:
        return f"{mins}min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


def format_time_block(block: Block) -> str:
    """Format a block as "9:00 AM - 5:00 PM" in the block's own timezone."""
    return f"{block.start.format('h:mm A')} - {block.end.format('h:mm A')}"


def describe_block(block: Block) -> Dict[str, Any]:
    """Return a human-readable description of a block."""
    return {
        "date": block.start.format("ddd, MMM D"),
        "start_time": block.start.format("h:mm A"),
        "end_time": block.end.format("h:mm A"),
        "duration_minutes": block_duration_minutes(block),
    }


def filter_by_min_duration(blocks: Iterable[Block], min_minutes: int) -> List[Block]:
    """Keep only blocks at least ``min_minutes`` long."""
    return [block for block in blocks if block_duration_minutes(block) >= min_minutes]


def format_suggestions(
    blocks: Sequence[Block],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[str]:
    """
    Render the first ``limit`` blocks as bullet lines.

    Format: • 9:00 AM - 5:00 PM (8h)
    A trailing "...and more" line marks truncated output.
    """
    lines = [
        f"• {format_time_block(block)} ({format_duration(block_duration_minutes(block))})"
        for block in blocks[:limit]
    ]

    if len(blocks) > limit:
        lines.append("...and more")

    return lines
