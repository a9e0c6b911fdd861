"""Immutable view of everything the slot engine reads."""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from slotbook.schemas.availability_schema import DayAvailability, WeekdaySchedule
from slotbook.schemas.booking_schema import Booking
from slotbook.scheduling.timeutils import as_date

WeeklySchedule = Mapping[int, WeekdaySchedule]


@dataclass(frozen=True)
class ScheduleSnapshot:
    """
    Bookings, per-date overrides and the default weekly schedule at one instant.

    The core never mutates a snapshot; the store hands out a fresh one per
    read. ``default_schedule`` is None when no schedule has been configured.
    """

    bookings: tuple[Booking, ...] = ()
    overrides: Mapping[str, DayAvailability] = field(
        default_factory=lambda: MappingProxyType({})
    )
    default_schedule: Optional[WeeklySchedule] = None

    @classmethod
    def build(
        cls,
        bookings: Optional[list[Booking]] = None,
        overrides: Optional[dict[str, DayAvailability]] = None,
        default_schedule: Optional[dict[int, WeekdaySchedule]] = None,
    ) -> "ScheduleSnapshot":
        return cls(
            bookings=tuple(bookings or ()),
            overrides=MappingProxyType(dict(overrides or {})),
            default_schedule=(
                MappingProxyType(dict(default_schedule))
                if default_schedule is not None
                else None
            ),
        )

    def bookings_on(self, day: date) -> list[Booking]:
        """Bookings whose start time falls on ``day``; malformed ones are skipped."""
        target = as_date(day)
        return [
            b for b in self.bookings
            if b.start_time is not None and b.start_time.date() == target
        ]

    def without_booking(self, booking_id: Optional[str]) -> "ScheduleSnapshot":
        if booking_id is None:
            return self
        return ScheduleSnapshot(
            bookings=tuple(b for b in self.bookings if b.id != booking_id),
            overrides=self.overrides,
            default_schedule=self.default_schedule,
        )
