"""
Tests for intersecting several people's free time.
"""

import pendulum

from freetimefinder.domain.intersector import find_common_free_time, free_blocks
from freetimefinder.domain.models import AvailabilityStatus

TZ = "Europe/Berlin"


def _status(start: str, end: str, free: bool = True) -> AvailabilityStatus:
    return AvailabilityStatus(
        start=pendulum.parse(f"2024-01-01 {start}", tz=TZ),
        end=pendulum.parse(f"2024-01-01 {end}", tz=TZ),
        free=free,
    )


def _hours(blocks):
    return [(b.start.format("HH:mm"), b.end.format("HH:mm")) for b in blocks]


class TestFindCommonFreeTime:
    """Tests for find_common_free_time."""

    def test_intersection_of_free_times(self):
        result = find_common_free_time([
            [_status("09:00", "15:00")],
            [_status("11:00", "17:00")],
        ])

        assert _hours(result) == [("11:00", "15:00")]

    def test_no_overlap(self):
        result = find_common_free_time([
            [_status("09:00", "12:00")],
            [_status("14:00", "17:00")],
        ])

        assert result == []

    def test_touching_free_times_do_not_intersect(self):
        result = find_common_free_time([
            [_status("09:00", "12:00")],
            [_status("12:00", "17:00")],
        ])

        assert result == []

    def test_empty_list(self):
        assert find_common_free_time([]) == []

    def test_single_person_returns_free_segments(self):
        statuses = [
            _status("09:00", "10:00"),
            _status("10:00", "11:00", free=False),
            _status("11:00", "17:00"),
        ]

        result = find_common_free_time([statuses])

        assert _hours(result) == [("09:00", "10:00"), ("11:00", "17:00")]
        assert result == free_blocks(statuses)

    def test_busy_segments_are_ignored(self):
        result = find_common_free_time([
            [_status("09:00", "12:00"), _status("12:00", "13:00", free=False), _status("13:00", "17:00")],
            [_status("10:00", "16:00")],
        ])

        assert _hours(result) == [("10:00", "12:00"), ("13:00", "16:00")]

    def test_three_people(self):
        result = find_common_free_time([
            [_status("08:00", "18:00")],
            [_status("09:00", "12:00"), _status("14:00", "17:00")],
            [_status("11:00", "15:00")],
        ])

        assert _hours(result) == [("11:00", "12:00"), ("14:00", "15:00")]

    def test_person_without_free_time_empties_result(self):
        result = find_common_free_time([
            [_status("09:00", "17:00")],
            [_status("09:00", "17:00", free=False)],
            [_status("09:00", "17:00")],
        ])

        assert result == []

    def test_pieces_are_not_remerged(self):
        result = find_common_free_time([
            [_status("09:00", "10:00"), _status("10:00", "11:00")],
            [_status("09:00", "11:00")],
        ])

        assert _hours(result) == [("09:00", "10:00"), ("10:00", "11:00")]
