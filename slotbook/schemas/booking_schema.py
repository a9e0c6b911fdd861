"""Booking data models."""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompletionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class ContactType(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    LINE = "line"
    IG = "ig"
    TWITTER = "twitter"
    FB = "fb"


class FormAnswer(BaseModel):
    """One answered questionnaire step, kept with the booking."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class Booking(BaseModel):
    """
    A committed booking.

    Plan duration, rest time and name are copied in at creation time so
    later plan edits never move an existing booking. ``start_time`` is
    optional only to tolerate malformed stored records; such bookings
    never block a slot.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    start_time: Optional[datetime] = None
    duration_minutes: int = Field(default=0, ge=0)
    rest_minutes: int = Field(default=0, ge=0)
    plan_id: str = ""
    plan_name: str = ""
    name: str = ""
    contact: str = ""
    contact_type: ContactType = ContactType.PHONE
    form_answers: list[FormAnswer] = Field(default_factory=list)
    is_read: bool = False
    completion_status: CompletionStatus = CompletionStatus.PENDING
    created_at: Optional[datetime] = None

    @property
    def occupied_end(self) -> Optional[datetime]:
        """End of the half-open occupied interval, or None without a start."""
        if self.start_time is None:
            return None
        return self.start_time + timedelta(
            minutes=self.duration_minutes + self.rest_minutes
        )


class BookingRequest(BaseModel):
    """Validated booking submission from a visitor."""

    start_time: datetime
    name: str
    contact: str
    contact_type: ContactType = ContactType.PHONE
    form_answers: list[FormAnswer] = Field(default_factory=list)

    @field_validator("start_time")
    @classmethod
    def _local_wall_clock(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)

    @field_validator("name", "contact")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()
