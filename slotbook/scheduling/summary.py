"""
Calendar cell summaries.

Aggregates slot generation into a display-ready status per hour:
unavailable (expired / not yet open), rest, available with a count, or
full. When no plan has been picked yet, a short preview plan is used so the
calendar overview can still show which hours have room.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from slotbook.config import BookingConfig, CalendarConfig, settings
from slotbook.schemas.availability_schema import HourStatus, HourSummary, UnavailableReason
from slotbook.schemas.plan_schema import Plan
from slotbook.scheduling.availability import is_hour_in_windows, resolve_availability
from slotbook.scheduling.slots import generate_slots_for_hour
from slotbook.scheduling.snapshot import ScheduleSnapshot
from slotbook.scheduling.timeutils import (
    as_date,
    booking_horizon_end,
    format_date,
    hour_start,
    resolve_now,
)

logger = logging.getLogger(__name__)

PREVIEW_PLAN_ID = "__preview__"


def preview_plan(config: Optional[BookingConfig] = None) -> Plan:
    """Minimal plan used for the calendar overview before a plan is chosen."""
    config = config or settings.booking
    return Plan(
        id=PREVIEW_PLAN_ID,
        name="Preview",
        duration_minutes=config.preview_duration_minutes,
        rest_minutes=config.preview_rest_minutes,
    )


def get_hour_summary(
    day: date,
    hour: int,
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
) -> HourSummary:
    config = config or settings.booking
    now = resolve_now(now)
    date_key = format_date(day)
    start = hour_start(day, hour)

    if start < now:
        return HourSummary(
            date=date_key, hour=hour,
            status=HourStatus.UNAVAILABLE, reason=UnavailableReason.EXPIRED,
        )
    if start > booking_horizon_end(now, config.booking_window_days):
        return HourSummary(
            date=date_key, hour=hour,
            status=HourStatus.UNAVAILABLE, reason=UnavailableReason.NOT_YET_OPEN,
        )

    day_availability = resolve_availability(
        day, snapshot.overrides, snapshot.default_schedule, config
    )
    if day_availability.is_rest or not is_hour_in_windows(hour, day_availability.slots):
        return HourSummary(date=date_key, hour=hour, status=HourStatus.REST)

    slots = generate_slots_for_hour(start, plan or preview_plan(config), snapshot, now, config)
    if slots:
        return HourSummary(
            date=date_key, hour=hour, status=HourStatus.AVAILABLE, count=len(slots)
        )
    return HourSummary(date=date_key, hour=hour, status=HourStatus.FULL)


def summarize_day(
    day: date,
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    calendar: Optional[CalendarConfig] = None,
) -> list[HourSummary]:
    """Summaries for every displayed hour of ``day``, in order."""
    calendar = calendar or settings.calendar
    now = resolve_now(now)
    return [
        get_hour_summary(day, hour, plan, snapshot, now, config)
        for hour in range(calendar.start_hour, calendar.end_hour)
    ]


def summarize_week(
    start_day: date,
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    calendar: Optional[CalendarConfig] = None,
    days: int = 7,
) -> dict[str, list[HourSummary]]:
    """Calendar grid keyed by ``YYYY-MM-DD`` for ``days`` consecutive days."""
    now = resolve_now(now)
    first = as_date(start_day)
    grid = {}
    for offset in range(days):
        day = first + timedelta(days=offset)
        grid[format_date(day)] = summarize_day(day, plan, snapshot, now, config, calendar)
    logger.debug("Built calendar grid for %d day(s) from %s", days, format_date(first))
    return grid
