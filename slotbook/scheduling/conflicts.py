"""
Booking conflict detection.

Each booking occupies ``[start, start + duration + rest)``. A candidate
interval conflicts with a booking when the two half-open intervals overlap.
"""

from datetime import datetime
from typing import Iterable, Optional

from slotbook.schemas.booking_schema import Booking


def occupied_interval(booking: Booking) -> Optional[tuple[datetime, datetime]]:
    """The booking's occupied interval, or None when it has no start time."""
    if booking.start_time is None:
        return None
    return booking.start_time, booking.occupied_end


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    return a_start < b_end and a_end > b_start


def find_conflicts(
    start: datetime, end: datetime, day_bookings: Iterable[Booking]
) -> list[Booking]:
    """Bookings whose occupied interval overlaps ``[start, end)``."""
    blocking = []
    for booking in day_bookings:
        interval = occupied_interval(booking)
        if interval is None:
            continue
        if intervals_overlap(start, end, *interval):
            blocking.append(booking)
    return blocking


def has_booking_conflict(
    start: datetime, end: datetime, day_bookings: Iterable[Booking]
) -> bool:
    return bool(find_conflicts(start, end, day_bookings))
