"""
Core business logic for turning availability and events into free/busy
timelines.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from datetime import datetime
from typing import Dict, Iterator, List, Sequence, Tuple

import pendulum
from pendulum import DateTime

from .busy_subtractor import subtract_busy
from .exceptions import InvalidRangeError
from .intersector import find_common_free_time
from .interval_merger import merge_blocks
from .models import Availability, AvailabilityEvent, AvailabilityStatus, TimeBlock
from .slot_expander import expand_slot

logger = logging.getLogger(__name__)


class MutualAvailabilityCalculator:
    """
    Builds free/busy timelines from recurring availability and calendar events.

    Algorithm for a pooled summary:
    1. Walk every calendar day touched by the query range
    2. Expand every slot of every availability for that day and clip it
    3. Merge the expanded blocks into one union ("someone is available")
    4. Clip all events to the range
    5. Subtract the events from the merged availability

    For mutual free time the same pass runs once per person and the
    resulting timelines are intersected ("everyone is free").
    """

    def get_summary(
        self,
        availabilities: Sequence[Availability],
        events: Sequence[AvailabilityEvent],
        range_start: DateTime,
        range_end: DateTime,
    ) -> List[AvailabilityStatus]:
        """
        Compute the pooled free/busy timeline of all availabilities.

        Time outside every declared slot is absent from the result.

        Args:
            availabilities: Availability records of any number of people
            events: Busy events of any number of people
            range_start: Start of the query range (inclusive)
            range_end: End of the query range (exclusive)

        Returns:
            Ordered list of AvailabilityStatus segments

        Raises:
            InvalidRangeError: If range_end is before range_start
        """
        range_start, range_end = self._normalize_range(range_start, range_end)

        if range_start == range_end or not availabilities:
            return []

        availability_blocks = self._expand_availability_blocks(
            availabilities, range_start, range_end
        )
        merged_availability = merge_blocks(availability_blocks)
        event_blocks = self._clip_event_blocks(events, range_start, range_end)

        logger.debug(
            "Expanded %d availability blocks into %d merged blocks against %d events",
            len(availability_blocks),
            len(merged_availability),
            len(event_blocks),
        )

        return subtract_busy(merged_availability, event_blocks)

    def get_person_summaries(
        self,
        availabilities: Sequence[Availability],
        events: Sequence[AvailabilityEvent],
        range_start: DateTime,
        range_end: DateTime,
    ) -> Dict[str, List[AvailabilityStatus]]:
        """
        Compute one free/busy timeline per availability owner.

        An event with an owner only counts against that owner; an event
        without one counts against everybody.

        Returns:
            Dict mapping owner to their ordered status segments, in the order
            owners first appear in ``availabilities``
        """
        by_owner: Dict[str, List[Availability]] = {}
        for availability in availabilities:
            by_owner.setdefault(availability.owner, []).append(availability)

        summaries: Dict[str, List[AvailabilityStatus]] = {}

        for owner, owned in by_owner.items():
            owner_events = [
                event for event in events
                if not event.owner or event.owner == owner
            ]
            summaries[owner] = self.get_summary(owned, owner_events, range_start, range_end)

        return summaries

    def find_mutual_free_time(
        self,
        availabilities: Sequence[Availability],
        events: Sequence[AvailabilityEvent],
        range_start: DateTime,
        range_end: DateTime,
        min_duration_minutes: int = 0,
    ) -> List[TimeBlock]:
        """
        Find the time ranges where every availability owner is free.

        Args:
            availabilities: Availability records, grouped by owner internally
            events: Busy events, attributed by owner where set
            range_start: Start of the query range
            range_end: End of the query range
            min_duration_minutes: Drop common blocks shorter than this

        Returns:
            List of TimeBlock objects
        """
        summaries = self.get_person_summaries(availabilities, events, range_start, range_end)
        common = find_common_free_time(list(summaries.values()))

        return [
            block for block in common
            if block.duration_minutes() >= min_duration_minutes
        ]

    def _normalize_range(
        self,
        range_start: DateTime,
        range_end: DateTime,
    ) -> Tuple[DateTime, DateTime]:
        range_start = self._as_pendulum(range_start)
        range_end = self._as_pendulum(range_end)

        if range_end < range_start:
            raise InvalidRangeError(
                f"Range end {range_end} must not be before range start {range_start}"
            )

        return range_start, range_end

    @staticmethod
    def _as_pendulum(value: datetime) -> DateTime:
        if isinstance(value, DateTime):
            return value
        return pendulum.instance(value)

    def _iter_days(self, range_start: DateTime, range_end: DateTime) -> Iterator[DateTime]:
        """
        Yield the start of every calendar day whose window touches the range.

        Days are taken in the timezone of ``range_start``.
        """
        current = range_start.start_of("day")
        last = range_end.in_timezone(range_start.tzinfo).end_of("day")

        while current <= last:
            yield current
            current = current.add(days=1)

    def _expand_availability_blocks(
        self,
        availabilities: Sequence[Availability],
        range_start: DateTime,
        range_end: DateTime,
    ) -> List[TimeBlock]:
        blocks: List[TimeBlock] = []

        for day in self._iter_days(range_start, range_end):
            for availability in availabilities:
                for slot in availability.slots:
                    block = expand_slot(slot, day)
                    if block is None:
                        continue

                    clipped = block.clip(range_start, range_end)
                    if clipped:
                        blocks.append(clipped)

        return blocks

    def _clip_event_blocks(
        self,
        events: Sequence[AvailabilityEvent],
        range_start: DateTime,
        range_end: DateTime,
    ) -> List[TimeBlock]:
        blocks: List[TimeBlock] = []

        for event in events:
            clipped = event.to_block().clip(range_start, range_end)
            if clipped:
                blocks.append(clipped)

        return blocks
