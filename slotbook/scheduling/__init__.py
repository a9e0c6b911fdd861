"""
Scheduling core: pure functions over an immutable ScheduleSnapshot.

- Effective availability resolution (availability.py)
- Conflict detection (conflicts.py)
- Evening-load rule (rules.py)
- Slot predicate and generation (slots.py)
- Hour/day calendar summaries (summary.py)
"""

from slotbook.scheduling.availability import resolve_availability
from slotbook.scheduling.conflicts import has_booking_conflict
from slotbook.scheduling.rules import check_evening_rules
from slotbook.scheduling.slots import (
    SlotDecision,
    SlotRejection,
    explain_slot,
    find_next_available,
    generate_slots_for_day,
    generate_slots_for_hour,
    is_slot_available,
)
from slotbook.scheduling.snapshot import ScheduleSnapshot
from slotbook.scheduling.summary import get_hour_summary, summarize_day, summarize_week

__all__ = [
    "ScheduleSnapshot",
    "resolve_availability",
    "has_booking_conflict",
    "check_evening_rules",
    "SlotDecision",
    "SlotRejection",
    "explain_slot",
    "is_slot_available",
    "generate_slots_for_hour",
    "generate_slots_for_day",
    "find_next_available",
    "get_hour_summary",
    "summarize_day",
    "summarize_week",
]
