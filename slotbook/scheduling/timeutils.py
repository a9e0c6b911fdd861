"""
Calendar and time primitives for the slot engine.

All datetimes are naive local wall-clock values. "Today" and the booking
horizon are always derived from an explicit evaluation instant.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from slotbook.schemas.availability_schema import TimeWindow

DATE_FORMAT = "%Y-%m-%d"


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return the evaluation instant, defaulting to the current local time."""
    return now if now is not None else datetime.now()


def parse_hhmm(value: str) -> tuple[int, int]:
    """Split ``"HH:MM"`` into ``(hour, minute)``."""
    hour, minute = value.split(":")
    return int(hour), int(minute)


def format_date(day: date) -> str:
    """Format a date (or datetime) as the ``YYYY-MM-DD`` override key."""
    return day.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def as_date(day: date) -> date:
    """Drop the time part of a datetime; dates pass through."""
    if isinstance(day, datetime):
        return day.date()
    return day


def js_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def start_of_day(moment: date) -> datetime:
    return datetime.combine(as_date(moment), time.min)


def end_of_day(moment: date) -> datetime:
    return datetime.combine(as_date(moment), time.max)


def booking_horizon_end(now: datetime, window_days: int) -> datetime:
    """Last bookable instant: end of day (today + window_days - 1)."""
    return end_of_day(as_date(now) + timedelta(days=window_days - 1))


def hour_start(day: date, hour: int) -> datetime:
    return start_of_day(day) + timedelta(hours=hour)


def window_bounds(day: date, window: TimeWindow) -> tuple[datetime, datetime]:
    """Concrete ``[start, end)`` datetimes of an open window on ``day``."""
    base = start_of_day(day)
    start_h, start_m = parse_hhmm(window.start)
    end_h, end_m = parse_hhmm(window.end)
    start = base + timedelta(hours=start_h, minutes=start_m)
    if (end_h, end_m) == (0, 0):
        end_h = 24
    end = base + timedelta(hours=end_h, minutes=end_m)
    return start, end


def add_minutes(moment: datetime, minutes: int) -> datetime:
    return moment + timedelta(minutes=minutes)


def is_on_grid(moment: datetime, interval_minutes: int) -> bool:
    """True when ``moment`` is a whole multiple of ``interval_minutes`` past the hour."""
    return (
        moment.minute % interval_minutes == 0
        and moment.second == 0
        and moment.microsecond == 0
    )
