"""Sample schedule data for the CLI and local experimentation."""

from datetime import date, datetime, timedelta
from typing import Optional

from slotbook.schemas.availability_schema import DayAvailability, TimeWindow, WeekdaySchedule
from slotbook.schemas.booking_schema import Booking, FormAnswer
from slotbook.scheduling.timeutils import format_date
from slotbook.services.store import InMemoryScheduleStore

_WORKDAY = WeekdaySchedule(is_open=True, slots=[TimeWindow(start="09:00", end="19:00")])

# Monday-Saturday 09:00-19:00, closed Sunday.
DEFAULT_WEEKLY_SCHEDULE: dict[int, WeekdaySchedule] = {
    0: WeekdaySchedule(is_open=False),
    1: _WORKDAY,
    2: _WORKDAY,
    3: _WORKDAY,
    4: _WORKDAY,
    5: _WORKDAY,
    6: _WORKDAY,
}


def build_demo_store(today: Optional[date] = None) -> InMemoryScheduleStore:
    """Store with a rest day, a split-shift day and one booking, relative to ``today``."""
    today = today or date.today()
    rest_day = today + timedelta(days=1)
    split_day = today + timedelta(days=2)

    overrides = {
        format_date(rest_day): DayAvailability.rest(),
        format_date(split_day): DayAvailability.open(("09:00", "12:00"), ("14:00", "20:00")),
    }
    bookings = [
        Booking(
            id="booking1",
            start_time=datetime.combine(split_day, datetime.min.time()).replace(hour=10),
            duration_minutes=60,
            rest_minutes=15,
            plan_id="rec_half_body",
            plan_name="Half-Body Release (60 min)",
            name="Mr. Chen",
            contact="0912345678",
            form_answers=[FormAnswer(question="q1", answer="Neck and shoulders")],
            is_read=True,
            created_at=datetime.combine(today, datetime.min.time()),
        ),
    ]
    return InMemoryScheduleStore(
        bookings=bookings,
        overrides=overrides,
        default_schedule=DEFAULT_WEEKLY_SCHEDULE,
    )
