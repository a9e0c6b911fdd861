"""
In-memory schedule store with optimistic, versioned commits.

Readers get an immutable ScheduleSnapshot tagged with a version. Writers
commit against the version they read; if anything was committed in between,
the commit is refused with StaleSnapshotError and the caller re-reads.
Listeners registered with ``subscribe`` receive every new snapshot.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

from slotbook.schemas.availability_schema import DayAvailability, WeekdaySchedule
from slotbook.schemas.booking_schema import Booking
from slotbook.scheduling.snapshot import ScheduleSnapshot
from slotbook.scheduling.timeutils import format_date

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[ScheduleSnapshot], None]


class StaleSnapshotError(Exception):
    """Raised when a commit is based on a snapshot that is no longer current."""


@dataclass(frozen=True)
class VersionedSnapshot:
    version: int
    snapshot: ScheduleSnapshot


class InMemoryScheduleStore:
    """Reference store holding bookings, overrides and the weekly schedule."""

    def __init__(
        self,
        bookings: Optional[Iterable[Booking]] = None,
        overrides: Optional[dict[str, DayAvailability]] = None,
        default_schedule: Optional[dict[int, WeekdaySchedule]] = None,
    ) -> None:
        self._bookings: dict[str, Booking] = {b.id: b for b in bookings or ()}
        self._overrides: dict[str, DayAvailability] = dict(overrides or {})
        self._default_schedule = (
            dict(default_schedule) if default_schedule is not None else None
        )
        self._version = 0
        self._lock = asyncio.Lock()
        self._listeners: list[SnapshotListener] = []

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> ScheduleSnapshot:
        """Immutable view of the current state."""
        return ScheduleSnapshot.build(
            bookings=list(self._bookings.values()),
            overrides=self._overrides,
            default_schedule=self._default_schedule,
        )

    async def read(self) -> VersionedSnapshot:
        async with self._lock:
            return VersionedSnapshot(version=self._version, snapshot=self.snapshot())

    async def commit(
        self,
        expected_version: int,
        put: Iterable[Booking] = (),
        delete: Iterable[str] = (),
    ) -> VersionedSnapshot:
        """Apply booking writes atomically if nothing changed since ``expected_version``."""
        async with self._lock:
            if expected_version != self._version:
                raise StaleSnapshotError(
                    f"Snapshot version {expected_version} is stale "
                    f"(current: {self._version})"
                )
            for booking_id in delete:
                self._bookings.pop(booking_id, None)
            for booking in put:
                self._bookings[booking.id] = booking
            result = self._bump()
        self._notify(result.snapshot)
        return result

    async def set_day_override(self, day: date, availability: DayAvailability) -> None:
        """Admin editor: replace the availability for one date."""
        async with self._lock:
            self._overrides[format_date(day)] = availability
            result = self._bump()
        logger.info("Override set for %s: %s", format_date(day), availability.type.value)
        self._notify(result.snapshot)

    async def clear_day_override(self, day: date) -> bool:
        """Admin editor: drop a date's override. Returns False if none existed."""
        async with self._lock:
            if self._overrides.pop(format_date(day), None) is None:
                return False
            result = self._bump()
        logger.info("Override cleared for %s", format_date(day))
        self._notify(result.snapshot)
        return True

    async def set_default_schedule(
        self, default_schedule: Optional[dict[int, WeekdaySchedule]]
    ) -> None:
        async with self._lock:
            self._default_schedule = (
                dict(default_schedule) if default_schedule is not None else None
            )
            result = self._bump()
        logger.info("Default weekly schedule replaced")
        self._notify(result.snapshot)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _bump(self) -> VersionedSnapshot:
        self._version += 1
        return VersionedSnapshot(version=self._version, snapshot=self.snapshot())

    def _notify(self, snapshot: ScheduleSnapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
