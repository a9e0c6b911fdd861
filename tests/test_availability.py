"""Tests for effective availability resolution."""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from slotbook.schemas.availability_schema import (
    AvailabilityType,
    DayAvailability,
    TimeWindow,
    WeekdaySchedule,
)
from slotbook.scheduling.availability import is_hour_in_windows, resolve_availability
from slotbook.scheduling.timeutils import js_weekday
from tests.conftest import REST_DAY, SPLIT_DAY


class TestOverridePrecedence:
    def test_override_returned_untouched(self, overrides, weekly_schedule):
        result = resolve_availability(date(2025, 8, 10), overrides, weekly_schedule)
        assert result == overrides[SPLIT_DAY]

    def test_open_override_beats_closed_weekday(self, overrides, weekly_schedule):
        # 2025-08-10 is a Sunday, closed by default.
        result = resolve_availability(date(2025, 8, 10), overrides, weekly_schedule)
        assert result.type == AvailabilityType.OPEN
        assert [(w.start, w.end) for w in result.slots] == [("09:00", "12:00"), ("14:00", "20:00")]

    def test_rest_override_beats_open_weekday(self, overrides, weekly_schedule):
        result = resolve_availability(date(2025, 8, 12), overrides, weekly_schedule)
        assert result.is_rest
        assert result == overrides[REST_DAY]


class TestDefaultSchedule:
    def test_closed_weekday_is_rest(self, weekly_schedule):
        result = resolve_availability(date(2025, 8, 17), {}, weekly_schedule)
        assert result.type == AvailabilityType.REST

    def test_open_weekday_uses_its_slots(self, weekly_schedule):
        result = resolve_availability(date(2025, 8, 11), {}, weekly_schedule)
        assert result.type == AvailabilityType.OPEN
        assert result.slots == [TimeWindow(start="09:00", end="19:00")]

    def test_every_day_matches_its_weekday_entry(self, weekly_schedule):
        start = date(2025, 8, 1)
        for offset in range(14):
            day = start + timedelta(days=offset)
            entry = weekly_schedule[js_weekday(day)]
            result = resolve_availability(day, {}, weekly_schedule)
            assert result.is_rest == (not entry.is_open)
            if entry.is_open:
                assert result.slots == entry.slots


class TestFallback:
    def test_no_schedule_falls_back_to_wide_open(self, config):
        result = resolve_availability(date(2025, 8, 11), {}, None, config)
        assert result.type == AvailabilityType.OPEN
        assert result.slots == [TimeWindow(start="09:00", end="22:00")]

    def test_missing_weekday_entry_falls_back(self, config):
        schedule = {1: WeekdaySchedule(is_open=False)}
        result = resolve_availability(date(2025, 8, 13), {}, schedule, config)
        assert result.slots == [TimeWindow(start="09:00", end="22:00")]


class TestHourInWindows:
    def test_hour_inside(self):
        assert is_hour_in_windows(10, [TimeWindow(start="09:00", end="12:00")])

    def test_end_hour_excluded(self):
        assert not is_hour_in_windows(12, [TimeWindow(start="09:00", end="12:00")])

    def test_gap_between_windows(self):
        windows = DayAvailability.open(("09:00", "12:00"), ("14:00", "20:00")).slots
        assert not is_hour_in_windows(13, windows)
        assert is_hour_in_windows(14, windows)

    def test_midnight_end_counts_as_24(self):
        assert is_hour_in_windows(23, [TimeWindow(start="20:00", end="00:00")])


class TestTimeWindowValidation:
    def test_rejects_bad_format(self):
        with pytest.raises(ValidationError):
            TimeWindow(start="9am", end="12:00")

    def test_rejects_end_before_start(self):
        with pytest.raises(ValidationError):
            TimeWindow(start="12:00", end="09:00")

    def test_rejects_24_30(self):
        with pytest.raises(ValidationError):
            TimeWindow(start="09:00", end="24:30")
