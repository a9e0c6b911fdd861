"""Tests for calendar and time primitives."""

from datetime import date, datetime, time

from slotbook.schemas.availability_schema import TimeWindow
from slotbook.scheduling.timeutils import (
    booking_horizon_end,
    end_of_day,
    start_of_day,
    format_date,
    hour_start,
    js_weekday,
    parse_date,
    parse_hhmm,
    window_bounds,
)


class TestWeekday:
    def test_sunday_is_zero(self):
        assert js_weekday(date(2025, 8, 10)) == 0

    def test_saturday_is_six(self):
        assert js_weekday(date(2025, 8, 9)) == 6

    def test_accepts_datetime(self):
        assert js_weekday(datetime(2025, 8, 11, 15, 30)) == 1


class TestFormatting:
    def test_format_date_from_datetime(self):
        assert format_date(datetime(2025, 8, 9, 23, 59)) == "2025-08-09"

    def test_parse_date(self):
        assert parse_date("2025-08-10") == date(2025, 8, 10)

    def test_parse_hhmm(self):
        assert parse_hhmm("09:30") == (9, 30)


class TestDayBoundaries:
    def test_end_of_day(self):
        assert end_of_day(date(2025, 8, 9)) == datetime.combine(date(2025, 8, 9), time.max)

    def test_horizon_is_end_of_last_window_day(self):
        horizon = booking_horizon_end(datetime(2025, 8, 9, 8, 0), 21)
        assert horizon.date() == date(2025, 8, 29)
        assert horizon.time() == time.max

    def test_hour_start(self):
        assert hour_start(date(2025, 8, 9), 14) == datetime(2025, 8, 9, 14, 0)


class TestWindowBounds:
    def test_plain_window(self):
        start, end = window_bounds(date(2025, 8, 9), TimeWindow(start="09:00", end="12:30"))
        assert start == datetime(2025, 8, 9, 9, 0)
        assert end == datetime(2025, 8, 9, 12, 30)

    def test_midnight_end_closes_at_end_of_day(self):
        _, end = window_bounds(date(2025, 8, 9), TimeWindow(start="18:00", end="00:00"))
        assert end == datetime(2025, 8, 10, 0, 0)

    def test_24_00_end(self):
        _, end = window_bounds(date(2025, 8, 9), TimeWindow(start="18:00", end="24:00"))
        assert end == datetime(2025, 8, 10, 0, 0)


class TestStartOfDay:
    def test_truncates_to_midnight(self):
        assert start_of_day(datetime(2025, 8, 9, 17, 45)) == datetime(2025, 8, 9, 0, 0)
