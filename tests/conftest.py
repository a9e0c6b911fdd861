"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional

import pytest

from slotbook.config import BookingConfig
from slotbook.schemas.availability_schema import DayAvailability, WeekdaySchedule, TimeWindow
from slotbook.schemas.booking_schema import Booking
from slotbook.schemas.plan_schema import Plan
from slotbook.scheduling.snapshot import ScheduleSnapshot

# Saturday morning; 2025-08-10 is a Sunday, 2025-08-11 a Monday.
NOW = datetime(2025, 8, 9, 8, 0)

SPLIT_DAY = "2025-08-10"
REST_DAY = "2025-08-12"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def config() -> BookingConfig:
    return BookingConfig(
        booking_window_days=21,
        slot_interval_minutes=10,
        evening_start_hour=19,
        long_session_minutes=60,
        fallback_open_start="09:00",
        fallback_open_end="22:00",
        preview_duration_minutes=10,
        preview_rest_minutes=5,
        max_transaction_retries=3,
    )


@pytest.fixture
def short_plan() -> Plan:
    return make_plan("rec_experience_30", 30, 10)


@pytest.fixture
def long_plan() -> Plan:
    return make_plan("rec_half_body", 60, 15)


@pytest.fixture
def overrides() -> dict[str, DayAvailability]:
    return {
        SPLIT_DAY: DayAvailability.open(("09:00", "12:00"), ("14:00", "20:00")),
        REST_DAY: DayAvailability.rest(),
    }


@pytest.fixture
def weekly_schedule() -> dict[int, WeekdaySchedule]:
    workday = WeekdaySchedule(is_open=True, slots=[TimeWindow(start="09:00", end="19:00")])
    schedule = {day: workday for day in range(1, 7)}
    schedule[0] = WeekdaySchedule(is_open=False)
    return schedule


def make_plan(plan_id: str, duration: int, rest: int) -> Plan:
    return Plan(id=plan_id, name=plan_id, duration_minutes=duration, rest_minutes=rest)


def make_booking(
    start: Optional[datetime],
    duration: int = 60,
    rest: int = 15,
    booking_id: str = "booking1",
    **kwargs,
) -> Booking:
    """Helper to create a Booking with sensible defaults."""
    return Booking(
        id=booking_id,
        start_time=start,
        duration_minutes=duration,
        rest_minutes=rest,
        plan_id=kwargs.pop("plan_id", "rec_half_body"),
        **kwargs,
    )


def make_snapshot(
    bookings: Optional[list[Booking]] = None,
    overrides: Optional[dict[str, DayAvailability]] = None,
    default_schedule: Optional[dict[int, WeekdaySchedule]] = None,
) -> ScheduleSnapshot:
    return ScheduleSnapshot.build(bookings, overrides, default_schedule)
