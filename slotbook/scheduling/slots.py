"""
Slot availability predicate and slot generation.

The predicate answers "is this exact start time bookable for this plan?" by
short-circuiting through, in order: past, beyond horizon, rest day, window
fit, booking conflict, evening rule. The generators enumerate grid-aligned
start times and keep the ones the predicate accepts.

Usage:
    snapshot = ScheduleSnapshot.build(bookings, overrides, default_schedule)
    is_slot_available(datetime(2025, 8, 10, 11, 20), plan, snapshot, now=now)
    generate_slots_for_hour(datetime(2025, 8, 10, 11), plan, snapshot, now=now)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, TypedDict

from slotbook.config import BookingConfig, settings
from slotbook.schemas.plan_schema import Plan
from slotbook.scheduling.availability import resolve_availability
from slotbook.scheduling.conflicts import find_conflicts
from slotbook.scheduling.rules import check_evening_rules
from slotbook.scheduling.snapshot import ScheduleSnapshot
from slotbook.scheduling.timeutils import (
    add_minutes,
    as_date,
    booking_horizon_end,
    format_date,
    hour_start,
    resolve_now,
    window_bounds,
)

logger = logging.getLogger(__name__)


class SlotRejection(str, Enum):
    """Why a start time is not bookable."""
    MISSING_INPUT = "missing_input"
    PAST = "past"
    BEYOND_HORIZON = "beyond_horizon"
    REST_DAY = "rest_day"
    OUTSIDE_HOURS = "outside_hours"
    CONFLICT = "conflict"
    EVENING_LIMIT = "evening_limit"
    TIMEZONE_AWARE = "timezone_aware"
    OFF_GRID = "off_grid"


@dataclass(frozen=True)
class SlotDecision:
    """Outcome of evaluating one candidate start time."""
    available: bool
    rejection: Optional[SlotRejection] = None
    message: str = ""


class DateAvailability(TypedDict):
    """Summary of bookable slots for a single date."""

    date: str
    weekday: str
    slot_count: int
    first_slot: str


_OK = SlotDecision(available=True)


def _reject(rejection: SlotRejection, message: str) -> SlotDecision:
    return SlotDecision(available=False, rejection=rejection, message=message)


def explain_slot(
    slot_time: Optional[datetime],
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    exclude_booking_id: Optional[str] = None,
) -> SlotDecision:
    """Evaluate a candidate start time and report the first failing check."""
    if slot_time is None or plan is None:
        return _reject(SlotRejection.MISSING_INPUT, "Start time and plan are required.")

    if slot_time.tzinfo is not None:
        return _reject(
            SlotRejection.TIMEZONE_AWARE, "Start time must be naive local wall-clock time."
        )

    config = config or settings.booking
    now = resolve_now(now)

    if slot_time < now:
        return _reject(SlotRejection.PAST, "This time has already passed.")

    if slot_time > booking_horizon_end(now, config.booking_window_days):
        return _reject(
            SlotRejection.BEYOND_HORIZON,
            f"Bookings open {config.booking_window_days} days ahead.",
        )

    snapshot = snapshot.without_booking(exclude_booking_id)
    day_availability = resolve_availability(
        slot_time, snapshot.overrides, snapshot.default_schedule, config
    )
    if day_availability.is_rest:
        return _reject(SlotRejection.REST_DAY, "The studio is closed on this day.")

    total_end = add_minutes(slot_time, plan.total_minutes)

    fits_window = False
    for window in day_availability.slots:
        window_start, window_end = window_bounds(slot_time, window)
        if slot_time >= window_start and total_end <= window_end:
            fits_window = True
            break
    if not fits_window:
        return _reject(
            SlotRejection.OUTSIDE_HOURS, "The session does not fit within opening hours."
        )

    day_bookings = snapshot.bookings_on(slot_time)
    blocking = find_conflicts(slot_time, total_end, day_bookings)
    if blocking:
        return _reject(
            SlotRejection.CONFLICT,
            f"Overlaps {len(blocking)} existing booking(s).",
        )

    if not check_evening_rules(slot_time, plan, day_bookings, config):
        return _reject(
            SlotRejection.EVENING_LIMIT, "The evening is already fully committed."
        )

    return _OK


def is_slot_available(
    slot_time: Optional[datetime],
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    exclude_booking_id: Optional[str] = None,
) -> bool:
    """Return True when ``plan`` can start exactly at ``slot_time``."""
    decision = explain_slot(slot_time, plan, snapshot, now, config, exclude_booking_id)
    if not decision.available:
        logger.debug(
            "Slot %s rejected: %s",
            slot_time.isoformat() if slot_time else None,
            decision.rejection.value,
        )
    return decision.available


def generate_slots_for_hour(
    hour_start_time: Optional[datetime],
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    exclude_booking_id: Optional[str] = None,
) -> list[datetime]:
    """Bookable start times within one hour, on the fixed interval grid."""
    if hour_start_time is None or plan is None:
        return []

    config = config or settings.booking
    now = resolve_now(now)
    base = hour_start_time.replace(minute=0, second=0, microsecond=0)

    slots = []
    for i in range(config.slots_per_hour):
        candidate = add_minutes(base, i * config.slot_interval_minutes)
        if is_slot_available(candidate, plan, snapshot, now, config, exclude_booking_id):
            slots.append(candidate)
    return slots


def generate_slots_for_day(
    day: date,
    plan: Optional[Plan],
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    exclude_booking_id: Optional[str] = None,
) -> list[datetime]:
    """Bookable start times across all 24 hours of ``day``, in order."""
    now = resolve_now(now)
    slots: list[datetime] = []
    for hour in range(24):
        slots.extend(
            generate_slots_for_hour(
                hour_start(day, hour), plan, snapshot, now, config, exclude_booking_id
            )
        )
    return slots


def find_next_available(
    plan: Plan,
    snapshot: ScheduleSnapshot,
    now: Optional[datetime] = None,
    config: Optional[BookingConfig] = None,
    limit: int = 5,
) -> list[DateAvailability]:
    """The first ``limit`` dates within the booking horizon that have open slots."""
    config = config or settings.booking
    now = resolve_now(now)
    today = as_date(now)

    results: list[DateAvailability] = []
    for offset in range(config.booking_window_days):
        day = today + timedelta(days=offset)
        slots = generate_slots_for_day(day, plan, snapshot, now, config)
        if slots:
            results.append(
                {
                    "date": format_date(day),
                    "weekday": day.strftime("%A"),
                    "slot_count": len(slots),
                    "first_slot": slots[0].strftime("%H:%M"),
                }
            )
        if len(results) >= limit:
            break
    return results
