from slotbook.schemas.availability_schema import (
    AvailabilityType,
    DayAvailability,
    HourStatus,
    HourSummary,
    TimeWindow,
    UnavailableReason,
    WeekdaySchedule,
)
from slotbook.schemas.booking_schema import (
    Booking,
    BookingRequest,
    CompletionStatus,
    ContactType,
    FormAnswer,
)
from slotbook.schemas.plan_schema import Plan, PlanCategory

__all__ = [
    "AvailabilityType",
    "DayAvailability",
    "HourStatus",
    "HourSummary",
    "TimeWindow",
    "UnavailableReason",
    "WeekdaySchedule",
    "Booking",
    "BookingRequest",
    "CompletionStatus",
    "ContactType",
    "FormAnswer",
    "Plan",
    "PlanCategory",
]
