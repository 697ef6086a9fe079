"""
Tests for the AvailabilityService orchestration layer.
"""

import asyncio
from typing import Dict, List

import pendulum

from freetimefinder.domain.models import Availability, AvailabilityEvent, TimeSlot
from freetimefinder.services.availability_service import AvailabilityService

TZ = "Europe/Berlin"


class StubEventSource:
    """Minimal stub matching EventSourceProtocol."""

    def __init__(self, events: Dict[str, List[AvailabilityEvent]]):
        self._events = events
        self.calls: List[Dict[str, str]] = []

    async def get_events(self, owners, start_time, end_time):
        self.calls.append(
            {
                "owners": tuple(owners),
                "start": start_time.to_datetime_string(),
                "end": end_time.to_datetime_string(),
            }
        )
        return self._events


class StubAvailabilityStore:
    """Minimal stub matching AvailabilityStoreProtocol."""

    def __init__(self, availabilities: List[Availability]):
        self._availabilities = availabilities

    async def get_availabilities(self, owners=None):
        return [a for a in self._availabilities if owners is None or a.owner in owners]


def _availability(owner: str, *slots) -> Availability:
    return Availability(
        id=f"avail-{owner}",
        owner=owner,
        title="Work",
        slots=tuple(TimeSlot(*slot) for slot in slots),
    )


def _event(owner: str, start: str, end: str) -> AvailabilityEvent:
    return AvailabilityEvent(
        start_time=pendulum.parse(start, tz=TZ),
        end_time=pendulum.parse(end, tz=TZ),
        owner=owner,
    )


def _build_service(availabilities, events) -> AvailabilityService:
    return AvailabilityService(
        event_source=StubEventSource(events),
        availability_store=StubAvailabilityStore(availabilities),
    )


START = pendulum.parse("2024-01-01 00:00", tz=TZ)
END = pendulum.parse("2024-01-02 00:00", tz=TZ)


def test_fetch_events_includes_missing_owners():
    """Owners without event entries should still appear in the map."""
    service = _build_service([], {"a@example.com": []})

    events = asyncio.run(
        service.fetch_events(
            owners=["a@example.com", "b@example.com"],
            start_date=START,
            end_date=END,
        )
    )

    assert set(events.keys()) == {"a@example.com", "b@example.com"}
    assert events["b@example.com"] == []


def test_summary_pools_all_owners():
    availabilities = [
        _availability("a@example.com", (1, 540, 720)),
        _availability("b@example.com", (1, 660, 900)),
    ]
    events = {"a@example.com": [_event("a@example.com", "2024-01-01 10:00", "2024-01-01 11:00")]}
    service = _build_service(availabilities, events)

    statuses = asyncio.run(
        service.summary(owners=["a@example.com", "b@example.com"], start_date=START, end_date=END)
    )

    assert [(s.start.hour, s.end.hour, s.free) for s in statuses] == [
        (9, 10, True),
        (10, 11, False),
        (11, 15, True),
    ]


def test_common_free_time_uses_calendar_data():
    availabilities = [
        _availability("a@example.com", (1, 540, 900)),
        _availability("b@example.com", (1, 660, 1020)),
    ]
    events = {"a@example.com": [_event("a@example.com", "2024-01-01 12:00", "2024-01-01 13:00")]}
    source = StubEventSource(events)
    service = AvailabilityService(
        event_source=source,
        availability_store=StubAvailabilityStore(availabilities),
    )

    blocks = asyncio.run(
        service.common_free_time(
            owners=["a@example.com", "b@example.com"],
            start_date=START,
            end_date=END,
            min_duration_minutes=30,
        )
    )

    assert [(b.start.hour, b.end.hour) for b in blocks] == [(11, 12), (13, 15)]
    assert source.calls[0]["owners"] == ("a@example.com", "b@example.com")


def test_common_free_time_empty_when_owner_has_no_availability():
    service = _build_service([_availability("a@example.com", (1, 540, 900))], {})

    blocks = asyncio.run(
        service.common_free_time(
            owners=["a@example.com", "b@example.com"],
            start_date=START,
            end_date=END,
        )
    )

    assert blocks == []
