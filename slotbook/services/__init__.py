from slotbook.services.booking import (
    BookingError,
    BookingNotFoundError,
    BookingService,
    SlotConflictError,
)
from slotbook.services.plans import (
    PlanNotFoundError,
    get_all_plans,
    get_plan,
    require_plan,
)
from slotbook.services.store import InMemoryScheduleStore, StaleSnapshotError

__all__ = [
    "BookingError",
    "BookingNotFoundError",
    "BookingService",
    "SlotConflictError",
    "PlanNotFoundError",
    "get_all_plans",
    "get_plan",
    "require_plan",
    "InMemoryScheduleStore",
    "StaleSnapshotError",
]
