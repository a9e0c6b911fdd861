"""
Effective availability resolution.

Merges admin per-date overrides with the default weekly schedule into one
open/rest answer for a calendar date. Precedence:

    override[date]  >  default_schedule[weekday]  >  fallback open window
"""

import logging
from datetime import date
from typing import Mapping, Optional

from slotbook.config import BookingConfig, settings
from slotbook.schemas.availability_schema import (
    AvailabilityType,
    DayAvailability,
    TimeWindow,
    WeekdaySchedule,
)
from slotbook.scheduling.timeutils import format_date, js_weekday, parse_hhmm

logger = logging.getLogger(__name__)


def fallback_availability(config: Optional[BookingConfig] = None) -> DayAvailability:
    """Wide-open day used when no schedule entry applies."""
    config = config or settings.booking
    return DayAvailability(
        type=AvailabilityType.OPEN,
        slots=[TimeWindow(start=config.fallback_open_start, end=config.fallback_open_end)],
    )


def resolve_availability(
    day: date,
    overrides: Mapping[str, DayAvailability],
    default_schedule: Optional[Mapping[int, WeekdaySchedule]] = None,
    config: Optional[BookingConfig] = None,
) -> DayAvailability:
    """Return the effective availability for ``day``. Never raises."""
    override = overrides.get(format_date(day))
    if override is not None:
        return override

    if default_schedule is not None:
        weekday_entry = default_schedule.get(js_weekday(day))
        if weekday_entry is not None:
            if not weekday_entry.is_open:
                return DayAvailability(type=AvailabilityType.REST)
            return DayAvailability(
                type=AvailabilityType.OPEN, slots=list(weekday_entry.slots)
            )

    logger.debug("No schedule entry for %s, using fallback window", format_date(day))
    return fallback_availability(config)


def is_hour_in_windows(hour: int, windows: list[TimeWindow]) -> bool:
    """Hour-granular window test used by the calendar grid.

    Only the hour parts of each window count, and an end hour of 0 is
    treated as 24.
    """
    for window in windows:
        start_hour, _ = parse_hhmm(window.start)
        end_hour, _ = parse_hhmm(window.end)
        if end_hour == 0:
            end_hour = 24
        if start_hour <= hour < end_hour:
            return True
    return False
