"""
Pydantic models for the external availability contract.

Instants cross the boundary as int64 epoch milliseconds; events also accept
ISO-8601 strings as produced by calendar APIs.
"""

from typing import List, Union

import pendulum
from pendulum import DateTime
from pydantic import AliasChoices, BaseModel, Field

from ..domain.models import (
    Availability,
    AvailabilityEvent,
    AvailabilityStatus,
    TimeBlock,
    from_epoch_ms,
)

Instant = Union[int, str]


def parse_instant(value: Instant, tz: str) -> DateTime:
    """
    Parse an epoch-millisecond integer or an ISO-8601 string.

    Strings without an offset are interpreted in ``tz``.
    """
    if isinstance(value, int):
        return from_epoch_ms(value, tz=tz)

    parsed = pendulum.parse(value, tz=tz)
    if not isinstance(parsed, DateTime):
        raise ValueError(f"Expected a date and time, got {value!r}")
    return parsed


class TimeSlotPayload(BaseModel):
    """Recurring slot as stored by the persistence layer."""
    day_of_week: int
    start_time: int
    end_time: int


class AvailabilityPayload(BaseModel):
    """Availability record as stored by the persistence layer."""
    id: str
    owner: str
    title: str
    description: str = ""
    slots: List[TimeSlotPayload] = Field(default_factory=list)
    timezone: str = "UTC"
    created_at: int = 0
    updated_at: int = 0

    def to_domain(self) -> Availability:
        """
        Convert to a validated domain record.

        Raises:
            SlotValidationError: If any slot is malformed
        """
        data = self.model_dump()
        data["owner"] = self.owner.lower()
        return Availability.from_dict(data)


class AvailabilityEventPayload(BaseModel):
    """Busy event as supplied by a calendar source."""
    owner: str = ""
    start: Instant = Field(validation_alias=AliasChoices("start", "startTime"))
    end: Instant = Field(validation_alias=AliasChoices("end", "endTime"))

    def to_domain(self, tz: str = "UTC") -> AvailabilityEvent:
        """
        Convert to a domain event.

        Raises:
            EventValidationError: If the event does not end after it starts
            ValueError: If a timestamp cannot be parsed
        """
        return AvailabilityEvent(
            start_time=parse_instant(self.start, tz),
            end_time=parse_instant(self.end, tz),
            owner=self.owner.lower(),
        )


class TimeBlockPayload(BaseModel):
    """Time block in epoch milliseconds."""
    start: int
    end: int

    @classmethod
    def from_domain(cls, block: TimeBlock) -> "TimeBlockPayload":
        return cls(start=block.start_ms, end=block.end_ms)

    def to_domain(self, tz: str = "UTC") -> TimeBlock:
        return TimeBlock(start=from_epoch_ms(self.start, tz), end=from_epoch_ms(self.end, tz))


class AvailabilityStatusPayload(BaseModel):
    """Free/busy segment in epoch milliseconds."""
    start: int
    end: int
    free: bool

    @classmethod
    def from_domain(cls, status: AvailabilityStatus) -> "AvailabilityStatusPayload":
        return cls(start=status.start_ms, end=status.end_ms, free=status.free)

    def to_domain(self, tz: str = "UTC") -> AvailabilityStatus:
        return AvailabilityStatus(
            start=from_epoch_ms(self.start, tz),
            end=from_epoch_ms(self.end, tz),
            free=self.free,
        )
