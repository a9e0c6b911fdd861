"""
Evening-load business rule.

From the evening threshold hour onwards, a long session gets the evening to
itself: a long candidate is refused when any evening booking exists, and an
existing long evening booking refuses every further evening candidate.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from slotbook.config import BookingConfig, settings
from slotbook.schemas.booking_schema import Booking
from slotbook.schemas.plan_schema import Plan

logger = logging.getLogger(__name__)


def evening_bookings(
    day_bookings: Iterable[Booking], config: Optional[BookingConfig] = None
) -> list[Booking]:
    config = config or settings.booking
    return [
        b for b in day_bookings
        if b.start_time is not None and b.start_time.hour >= config.evening_start_hour
    ]


def check_evening_rules(
    slot_time: datetime,
    plan: Plan,
    day_bookings: Iterable[Booking],
    config: Optional[BookingConfig] = None,
) -> bool:
    """Return True when the evening rule allows booking ``plan`` at ``slot_time``."""
    config = config or settings.booking
    if slot_time.hour < config.evening_start_hour:
        return True

    evening = evening_bookings(day_bookings, config)
    if plan.duration_minutes >= config.long_session_minutes and evening:
        logger.debug("Evening rule: long plan %s refused, evening already booked", plan.id)
        return False
    if any(b.duration_minutes >= config.long_session_minutes for b in evening):
        logger.debug("Evening rule: evening held by a long session")
        return False
    return True
