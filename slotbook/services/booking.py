"""
Booking lifecycle on top of the schedule store.

Every write is a read-check-commit transaction: read a fresh snapshot,
re-run the slot predicate against it, then commit against that snapshot's
version. A refused slot surfaces as SlotConflictError so callers can say
"slot just taken" instead of "system error".
"""

import uuid
from datetime import datetime
from typing import Callable, Iterable, Optional, TypeVar

from slotbook.config import BookingConfig, settings
from slotbook.logging_context import get_request_logger, request_scope
from slotbook.schemas.booking_schema import (
    Booking,
    BookingRequest,
    CompletionStatus,
)
from slotbook.schemas.plan_schema import Plan
from slotbook.scheduling.slots import SlotDecision, SlotRejection, explain_slot
from slotbook.scheduling.snapshot import ScheduleSnapshot
from slotbook.scheduling.timeutils import is_on_grid, resolve_now
from slotbook.services.store import InMemoryScheduleStore, StaleSnapshotError
from slotbook.utils import normalize_contact

logger = get_request_logger(__name__)

T = TypeVar("T")
Writes = tuple[list[Booking], list[str], T]


class BookingError(Exception):
    """Base class for booking failures."""


class SlotConflictError(BookingError):
    """The requested slot is not bookable against the latest snapshot."""

    def __init__(self, slot_time: datetime, decision: SlotDecision) -> None:
        self.slot_time = slot_time
        self.decision = decision
        super().__init__(
            f"Slot {slot_time:%Y-%m-%d %H:%M:%S} is not available: {decision.message}"
        )


class BookingNotFoundError(BookingError):
    """No booking exists with the given id."""


def _new_booking_id() -> str:
    return f"BK-{uuid.uuid4().hex[:8].upper()}"


def _require(snapshot: ScheduleSnapshot, booking_id: str) -> Booking:
    for booking in snapshot.bookings:
        if booking.id == booking_id:
            return booking
    raise BookingNotFoundError(f"Booking {booking_id} not found.")


class BookingService:
    """
    Create, reschedule, cancel and annotate bookings.

    At most one booking can ever hold a conflicting interval: the
    predicate is re-evaluated inside each transaction, and a concurrent
    commit forces a re-read before anything is written.
    """

    def __init__(
        self,
        store: InMemoryScheduleStore,
        config: Optional[BookingConfig] = None,
        id_factory: Callable[[], str] = _new_booking_id,
    ) -> None:
        self._store = store
        self._config = config or settings.booking
        self._id_factory = id_factory

    async def _transact(self, operation: Callable[[ScheduleSnapshot], Writes]) -> T:
        """Run ``operation`` against fresh snapshots until its writes commit."""
        attempts = self._config.max_transaction_retries
        for attempt in range(1, attempts + 1):
            current = await self._store.read()
            put, delete, result = operation(current.snapshot)
            try:
                await self._store.commit(current.version, put, delete)
            except StaleSnapshotError:
                logger.info("Snapshot changed before commit, retrying (%d/%d)", attempt, attempts)
                continue
            return result
        raise BookingError(f"Could not commit after {attempts} attempts.")

    def _check_start(self, start: datetime) -> None:
        """Refuse start times the slot generator could never have offered."""
        if not is_on_grid(start, self._config.slot_interval_minutes):
            raise SlotConflictError(
                start,
                SlotDecision(
                    available=False,
                    rejection=SlotRejection.OFF_GRID,
                    message=(
                        f"Start times must fall on the {self._config.slot_interval_minutes}"
                        "-minute grid."
                    ),
                ),
            )

    async def create_booking(
        self,
        request: BookingRequest,
        plan: Plan,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Book ``plan`` at ``request.start_time``, guarding against races."""
        now = resolve_now(now)

        def operation(snapshot: ScheduleSnapshot) -> Writes:
            decision = explain_slot(request.start_time, plan, snapshot, now, self._config)
            if not decision.available:
                raise SlotConflictError(request.start_time, decision)
            booking = Booking(
                id=self._id_factory(),
                start_time=request.start_time,
                duration_minutes=plan.duration_minutes,
                rest_minutes=plan.rest_minutes,
                plan_id=plan.id,
                plan_name=plan.name,
                name=request.name,
                contact=normalize_contact(request.contact_type.value, request.contact),
                contact_type=request.contact_type,
                form_answers=list(request.form_answers),
                created_at=now,
            )
            return [booking], [], booking

        with request_scope():
            try:
                self._check_start(request.start_time)
                booking = await self._transact(operation)
            except SlotConflictError as exc:
                logger.warning("Booking refused: %s", exc)
                raise
            logger.info(
                "Booking created: %s for %s at %s (%s)",
                booking.id, booking.name, booking.start_time.isoformat(), booking.plan_id,
            )
        return booking

    async def reschedule_booking(
        self,
        booking_id: str,
        new_start: datetime,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Move a booking to ``new_start`` in one commit.

        The new slot is checked against the schedule without the booking
        being moved, and the old slot is only released when the new one is
        written. On refusal the original booking is left untouched.
        """
        now = resolve_now(now)

        def operation(snapshot: ScheduleSnapshot) -> Writes:
            existing = _require(snapshot, booking_id)
            if existing.duration_minutes <= 0:
                raise BookingError(f"Booking {booking_id} has no valid duration.")
            plan = Plan(
                id=existing.plan_id or existing.id,
                name=existing.plan_name,
                duration_minutes=existing.duration_minutes,
                rest_minutes=existing.rest_minutes,
            )
            decision = explain_slot(
                new_start, plan, snapshot, now, self._config, exclude_booking_id=booking_id
            )
            if not decision.available:
                raise SlotConflictError(new_start, decision)
            moved = existing.model_copy(update={"start_time": new_start})
            return [moved], [], moved

        with request_scope():
            self._check_start(new_start)
            moved = await self._transact(operation)
            logger.info("Booking rescheduled: %s to %s", moved.id, new_start.isoformat())
        return moved

    async def cancel_booking(self, booking_id: str) -> None:
        def operation(snapshot: ScheduleSnapshot) -> Writes:
            _require(snapshot, booking_id)
            return [], [booking_id], None

        with request_scope():
            await self._transact(operation)
            logger.info("Booking cancelled: %s", booking_id)

    async def mark_as_read(self, booking_ids: Iterable[str]) -> int:
        """Mark several bookings read in one batch. Returns how many were updated."""
        ids = list(dict.fromkeys(booking_ids))
        if not ids:
            return 0

        def operation(snapshot: ScheduleSnapshot) -> Writes:
            updated = [
                _require(snapshot, booking_id).model_copy(update={"is_read": True})
                for booking_id in ids
            ]
            return updated, [], len(updated)

        with request_scope():
            count = await self._transact(operation)
            logger.info("Marked %d booking(s) as read", count)
        return count

    async def mark_as_completed(self, booking_id: str) -> Booking:
        def operation(snapshot: ScheduleSnapshot) -> Writes:
            completed = _require(snapshot, booking_id).model_copy(
                update={"completion_status": CompletionStatus.COMPLETED}
            )
            return [completed], [], completed

        with request_scope():
            completed = await self._transact(operation)
            logger.info("Booking completed: %s", booking_id)
        return completed

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        for booking in self._store.snapshot().bookings:
            if booking.id == booking_id:
                return booking
        return None

    def list_bookings(self) -> list[Booking]:
        """All bookings ordered by start time; malformed records sort last."""
        return sorted(
            self._store.snapshot().bookings,
            key=lambda b: (b.start_time is None, b.start_time or datetime.max),
        )

    def unread_count(self) -> int:
        return sum(1 for b in self._store.snapshot().bookings if not b.is_read)

    def pending_count(self) -> int:
        return sum(
            1 for b in self._store.snapshot().bookings
            if b.completion_status == CompletionStatus.PENDING
        )
