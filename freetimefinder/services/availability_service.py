"""
Application services for availability summaries and mutual free time.

The service coordinates fetching availability records and busy events via
adapter protocols and delegates the actual computation to the domain-level
``MutualAvailabilityCalculator``. The calculator stays free of I/O and the
collaborators can be stubbed in tests.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from pendulum import DateTime

from ..domain.availability_calculator import MutualAvailabilityCalculator
from ..domain.models import Availability, AvailabilityEvent, AvailabilityStatus, TimeBlock

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the calendar event source needed by the service."""

    async def get_events(
        self,
        owners: Sequence[str],
        start_time: DateTime,
        end_time: DateTime,
    ) -> Dict[str, List[AvailabilityEvent]]:
        """Return busy events per owner."""


class AvailabilityStoreProtocol(Protocol):
    """Protocol describing the availability persistence needed by the service."""

    async def get_availabilities(
        self,
        owners: Optional[Sequence[str]] = None,
    ) -> List[Availability]:
        """Return availability records for the given owners."""


class AvailabilityService:
    """
    Orchestrates data retrieval and free/busy calculation.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        availability_store: AvailabilityStoreProtocol,
        calculator: Optional[MutualAvailabilityCalculator] = None,
    ) -> None:
        self._event_source = event_source
        self._availability_store = availability_store
        self._calculator = calculator or MutualAvailabilityCalculator()

    async def summary(
        self,
        *,
        owners: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
    ) -> List[AvailabilityStatus]:
        """
        Pooled free/busy timeline: when is anyone of ``owners`` available.
        """
        availabilities, events = await self._fetch(owners, start_date, end_date)

        return self._calculator.get_summary(
            availabilities=availabilities,
            events=events,
            range_start=start_date,
            range_end=end_date,
        )

    async def common_free_time(
        self,
        *,
        owners: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
        min_duration_minutes: int = 0,
    ) -> List[TimeBlock]:
        """
        Mutual free time: when is every one of ``owners`` free.

        An owner without any availability record has no free time, so the
        result is empty in that case.
        """
        availabilities, events = await self._fetch(owners, start_date, end_date)

        declared = {availability.owner.lower() for availability in availabilities}
        missing = [owner for owner in owners if owner.lower() not in declared]
        if missing:
            logger.info("No availability declared for: %s", ", ".join(missing))
            return []

        return self._calculator.find_mutual_free_time(
            availabilities=availabilities,
            events=events,
            range_start=start_date,
            range_end=end_date,
            min_duration_minutes=min_duration_minutes,
        )

    async def fetch_events(
        self,
        *,
        owners: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
    ) -> Dict[str, List[AvailabilityEvent]]:
        """Fetch busy events for the requested owners."""
        owner_list = list(owners)

        events = await self._event_source.get_events(
            owners=owner_list,
            start_time=start_date,
            end_time=end_date,
        )

        return self._ensure_event_entries(owner_list, events)

    async def _fetch(
        self,
        owners: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
    ) -> tuple[List[Availability], List[AvailabilityEvent]]:
        availabilities = await self._availability_store.get_availabilities(list(owners))
        events_by_owner = await self.fetch_events(
            owners=owners,
            start_date=start_date,
            end_date=end_date,
        )

        events = [event for owner_events in events_by_owner.values() for event in owner_events]

        logger.debug(
            "Fetched %d availability records and %d events for %d owners",
            len(availabilities),
            len(events),
            len(owners),
        )

        return availabilities, events

    @staticmethod
    def _ensure_event_entries(
        owners: Sequence[str],
        events: Dict[str, List[AvailabilityEvent]],
    ) -> Dict[str, List[AvailabilityEvent]]:
        """
        Ensure every requested owner appears in the event map.

        Sources may omit owners without events; we normalise that to an
        explicit empty list for deterministic downstream behaviour.
        """
        normalized: Dict[str, List[AvailabilityEvent]] = {}

        for owner in owners:
            normalized[owner] = events.get(owner, [])

        # Include any additional entries provided by the source as-is.
        for owner, owner_events in events.items():
            if owner not in normalized:
                normalized[owner] = owner_events

        return normalized
