"""
Domain models for recurring availability, concrete time blocks and
free/busy segments.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

import pendulum
from pendulum import DateTime

from .exceptions import EventValidationError, SlotValidationError

MINUTES_PER_DAY = 1440
MS_PER_MINUTE = 60_000

WEEKDAY_ABBREVIATIONS = {
    0: "Sun",
    1: "Mon",
    2: "Tue",
    3: "Wed",
    4: "Thu",
    5: "Fri",
    6: "Sat",
}


def to_epoch_ms(dt: DateTime) -> int:
    """Convert an instant to integer milliseconds since the epoch."""
    return dt.int_timestamp * 1000 + dt.microsecond // 1000


def from_epoch_ms(value: int, tz: str = "UTC") -> DateTime:
    """Build an instant from integer epoch milliseconds without float math."""
    seconds, millis = divmod(int(value), 1000)
    return pendulum.from_timestamp(seconds, tz=tz).add(microseconds=millis * 1000)


def format_minutes(minutes: int) -> str:
    """Render minutes past midnight as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a valid slot field
    if isinstance(value, bool) or not isinstance(value, int):
        raise SlotValidationError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class TimeSlot:
    """
    A recurring weekly availability rule.

    Invariant: 0 <= day_of_week <= 6 (0=Sunday), both times are minutes past
    midnight in 0..1439 and start_time < end_time.
    """
    day_of_week: int
    start_time: int
    end_time: int

    def __post_init__(self):
        day = _require_int("day_of_week", self.day_of_week)
        start = _require_int("start_time", self.start_time)
        end = _require_int("end_time", self.end_time)

        if not 0 <= day <= 6:
            raise SlotValidationError(
                f"day_of_week must be 0-6 (Sunday-Saturday), got {day}"
            )
        if not 0 <= start < MINUTES_PER_DAY:
            raise SlotValidationError(
                f"start_time must be 0-1439 (minutes in a day), got {start}"
            )
        if not 0 <= end < MINUTES_PER_DAY:
            raise SlotValidationError(
                f"end_time must be 0-1439 (minutes in a day), got {end}"
            )
        if start >= end:
            raise SlotValidationError(
                f"start_time {start} must be less than end_time {end}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeSlot":
        """
        Build a slot from a loosely-typed mapping.

        Raises:
            SlotValidationError: If a field is missing or invalid
        """
        try:
            return cls(
                day_of_week=data["day_of_week"],
                start_time=data["start_time"],
                end_time=data["end_time"],
            )
        except KeyError as exc:
            raise SlotValidationError(f"Time slot is missing field {exc}") from exc

    def duration_minutes(self) -> int:
        return self.end_time - self.start_time

    def overlaps(self, other: "TimeSlot") -> bool:
        """Check if two slots overlap on the same weekday."""
        return (
            self.day_of_week == other.day_of_week
            and self.start_time < other.end_time
            and other.start_time < self.end_time
        )

    def format_display(self) -> str:
        weekday = WEEKDAY_ABBREVIATIONS[self.day_of_week]
        return f"{weekday} {format_minutes(self.start_time)}-{format_minutes(self.end_time)}"


@dataclass(frozen=True)
class Availability:
    """
    One person's recurring weekly availability pattern.

    The timezone is carried along but not applied when slots are expanded.
    """
    id: str
    owner: str
    title: str
    slots: Tuple[TimeSlot, ...]
    timezone: str = "UTC"
    description: str = ""
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self):
        slots = tuple(self.slots)
        for index, slot in enumerate(slots):
            if not isinstance(slot, TimeSlot):
                raise SlotValidationError(
                    f"Availability '{self.id}' slot {index} is not a TimeSlot"
                )
        # Frozen dataclass: normalise lists to tuples in place
        object.__setattr__(self, "slots", slots)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Availability":
        """
        Build an availability record from a loosely-typed mapping.

        Raises:
            SlotValidationError: If any slot is malformed
        """
        availability_id = str(data.get("id", ""))
        slots = []
        for index, raw_slot in enumerate(data.get("slots") or []):
            try:
                slots.append(TimeSlot.from_dict(raw_slot))
            except SlotValidationError as exc:
                raise SlotValidationError(
                    f"Availability '{availability_id}' slot {index}: {exc}"
                ) from exc

        return cls(
            id=availability_id,
            owner=str(data.get("owner", "")),
            title=str(data.get("title", "")),
            description=str(data.get("description") or ""),
            slots=tuple(slots),
            timezone=str(data.get("timezone") or "UTC"),
            created_at=int(data.get("created_at") or 0),
            updated_at=int(data.get("updated_at") or 0),
        )


@dataclass(frozen=True)
class TimeBlock:
    """
    A concrete, date-anchored interval.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    @property
    def start_ms(self) -> int:
        return to_epoch_ms(self.start)

    @property
    def end_ms(self) -> int:
        return to_epoch_ms(self.end)

    def duration_minutes(self) -> int:
        """Return the duration in whole minutes."""
        return (self.end_ms - self.start_ms) // MS_PER_MINUTE

    def overlaps(self, other: "TimeBlock") -> bool:
        """Check if this block overlaps with another (touching does not count)."""
        return self.start < other.end and self.end > other.start

    def intersect(self, other: "TimeBlock") -> "TimeBlock | None":
        """
        Calculate the intersection of two blocks.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeBlock(start=max(self.start, other.start), end=min(self.end, other.end))

    def clip(self, lower: DateTime, upper: DateTime) -> "TimeBlock | None":
        """
        Restrict the block to [lower, upper).
        Returns None if the block lies completely outside the bounds.
        """
        if self.end <= lower or self.start >= upper:
            return None

        return TimeBlock(start=max(self.start, lower), end=min(self.end, upper))

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class AvailabilityEvent:
    """
    A busy commitment taken from a calendar.

    An empty owner means the event is not attributed to a single person.
    """
    start_time: DateTime
    end_time: DateTime
    owner: str = ""

    def __post_init__(self):
        if self.start_time >= self.end_time:
            raise EventValidationError(
                f"Event start {self.start_time} must be before end {self.end_time}"
            )

    def to_block(self) -> TimeBlock:
        return TimeBlock(start=self.start_time, end=self.end_time)


@dataclass(frozen=True)
class AvailabilityStatus:
    """
    A free or busy segment inside an availability block.
    """
    start: DateTime
    end: DateTime
    free: bool

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Segment start {self.start} must be before end {self.end}")

    @property
    def start_ms(self) -> int:
        return to_epoch_ms(self.start)

    @property
    def end_ms(self) -> int:
        return to_epoch_ms(self.end)

    def duration_minutes(self) -> int:
        return (self.end_ms - self.start_ms) // MS_PER_MINUTE

    def to_block(self) -> TimeBlock:
        return TimeBlock(start=self.start, end=self.end)
