"""
Tests for domain models.
"""

import pendulum
import pytest

from freetimefinder.domain.exceptions import EventValidationError, SlotValidationError
from freetimefinder.domain.models import (
    Availability,
    AvailabilityEvent,
    AvailabilityStatus,
    TimeBlock,
    TimeSlot,
    from_epoch_ms,
    to_epoch_ms,
)

TZ = "Europe/Berlin"


def _at(value: str):
    return pendulum.parse(value, tz=TZ)


class TestTimeSlot:
    """Tests for TimeSlot validation."""

    def test_create_valid_slot(self):
        slot = TimeSlot(day_of_week=1, start_time=540, end_time=1020)

        assert slot.duration_minutes() == 480
        assert slot.format_display() == "Mon 09:00-17:00"

    def test_zero_length_slot_is_rejected(self):
        """A slot ending where it starts must not become an empty block."""
        with pytest.raises(SlotValidationError, match="less than end_time"):
            TimeSlot(day_of_week=1, start_time=600, end_time=600)

    def test_reversed_slot_is_rejected(self):
        with pytest.raises(SlotValidationError):
            TimeSlot(day_of_week=1, start_time=720, end_time=600)

    @pytest.mark.parametrize("day", [-1, 7])
    def test_day_of_week_out_of_range(self, day):
        with pytest.raises(SlotValidationError, match="day_of_week"):
            TimeSlot(day_of_week=day, start_time=540, end_time=600)

    @pytest.mark.parametrize("start,end", [(-10, 600), (540, 1440)])
    def test_minutes_out_of_range(self, start, end):
        with pytest.raises(SlotValidationError, match="0-1439"):
            TimeSlot(day_of_week=2, start_time=start, end_time=end)

    def test_non_integer_fields_are_rejected(self):
        with pytest.raises(SlotValidationError, match="integer"):
            TimeSlot(day_of_week=True, start_time=540, end_time=600)
        with pytest.raises(SlotValidationError, match="integer"):
            TimeSlot(day_of_week=1, start_time=540.0, end_time=600)

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            TimeSlot(day_of_week=1, start_time=600, end_time=600)

    def test_from_dict_missing_field(self):
        with pytest.raises(SlotValidationError, match="missing field"):
            TimeSlot.from_dict({"day_of_week": 1, "start_time": 540})

    def test_overlaps_only_on_same_day(self):
        monday = TimeSlot(1, 540, 720)

        assert monday.overlaps(TimeSlot(1, 660, 900))
        assert not monday.overlaps(TimeSlot(2, 660, 900))
        assert not monday.overlaps(TimeSlot(1, 720, 900))


class TestAvailability:
    """Tests for Availability records."""

    def test_from_dict(self):
        availability = Availability.from_dict({
            "id": "a1",
            "owner": "alice@example.com",
            "title": "Work",
            "slots": [
                {"day_of_week": 1, "start_time": 540, "end_time": 1020},
                {"day_of_week": 2, "start_time": 540, "end_time": 720},
            ],
            "timezone": "America/New_York",
            "created_at": 1704067200000,
            "updated_at": 1704067200000,
        })

        assert availability.owner == "alice@example.com"
        assert availability.description == ""
        assert availability.slots == (TimeSlot(1, 540, 1020), TimeSlot(2, 540, 720))
        assert availability.created_at == 1704067200000

    def test_from_dict_reports_bad_slot_index(self):
        with pytest.raises(SlotValidationError, match="'a1' slot 1"):
            Availability.from_dict({
                "id": "a1",
                "owner": "alice@example.com",
                "title": "Work",
                "slots": [
                    {"day_of_week": 1, "start_time": 540, "end_time": 1020},
                    {"day_of_week": 1, "start_time": 600, "end_time": 600},
                ],
            })

    def test_slots_are_stored_as_tuple(self):
        availability = Availability(
            id="a1", owner="o", title="t", slots=[TimeSlot(1, 540, 600)]
        )

        assert isinstance(availability.slots, tuple)

    def test_rejects_non_slot_entries(self):
        with pytest.raises(SlotValidationError):
            Availability(id="a1", owner="o", title="t", slots=[{"day_of_week": 1}])


class TestTimeBlock:
    """Tests for TimeBlock model."""

    def test_invalid_block_raises_error(self):
        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            TimeBlock(start=_at("2024-01-01 17:00"), end=_at("2024-01-01 09:00"))

    def test_duration_minutes(self):
        block = TimeBlock(start=_at("2024-01-01 09:00"), end=_at("2024-01-01 10:30"))

        assert block.duration_minutes() == 90

    def test_touching_blocks_do_not_overlap(self):
        first = TimeBlock(start=_at("2024-01-01 09:00"), end=_at("2024-01-01 10:00"))
        second = TimeBlock(start=_at("2024-01-01 10:00"), end=_at("2024-01-01 11:00"))

        assert not first.overlaps(second)
        assert first.intersect(second) is None

    def test_intersect(self):
        first = TimeBlock(start=_at("2024-01-01 09:00"), end=_at("2024-01-01 12:00"))
        second = TimeBlock(start=_at("2024-01-01 11:00"), end=_at("2024-01-01 14:00"))

        intersection = first.intersect(second)

        assert intersection == TimeBlock(start=_at("2024-01-01 11:00"), end=_at("2024-01-01 12:00"))

    def test_clip(self):
        block = TimeBlock(start=_at("2024-01-01 09:00"), end=_at("2024-01-01 17:00"))

        clipped = block.clip(_at("2024-01-01 10:00"), _at("2024-01-01 12:00"))

        assert clipped == TimeBlock(start=_at("2024-01-01 10:00"), end=_at("2024-01-01 12:00"))
        assert block.clip(_at("2024-01-01 17:00"), _at("2024-01-01 18:00")) is None
        assert block.clip(_at("2024-01-01 00:00"), _at("2024-01-02 00:00")) == block


class TestEventsAndStatuses:
    """Tests for AvailabilityEvent and AvailabilityStatus."""

    def test_degenerate_event_is_rejected(self):
        with pytest.raises(EventValidationError):
            AvailabilityEvent(start_time=_at("2024-01-01 10:00"), end_time=_at("2024-01-01 10:00"))

    def test_event_to_block(self):
        event = AvailabilityEvent(start_time=_at("2024-01-01 10:00"), end_time=_at("2024-01-01 11:00"))

        assert event.to_block().duration_minutes() == 60

    def test_status_epoch_milliseconds(self):
        status = AvailabilityStatus(
            start=pendulum.datetime(2024, 1, 1, 9, tz="UTC"),
            end=pendulum.datetime(2024, 1, 1, 10, tz="UTC"),
            free=True,
        )

        assert status.start_ms == 1704099600000
        assert status.end_ms == 1704103200000
        assert status.duration_minutes() == 60


class TestEpochConversion:
    """Tests for epoch-millisecond helpers."""

    def test_to_epoch_ms(self):
        assert to_epoch_ms(pendulum.datetime(2024, 1, 1, tz="UTC")) == 1704067200000

    def test_from_epoch_ms_keeps_milliseconds(self):
        value = from_epoch_ms(1704067200123, tz="UTC")

        assert value.microsecond == 123000
        assert to_epoch_ms(value) == 1704067200123

    def test_from_epoch_ms_uses_timezone(self):
        value = from_epoch_ms(1704067200000, tz=TZ)

        assert value.hour == 1
        assert value.timezone_name == TZ
