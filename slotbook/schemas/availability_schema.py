"""Availability overrides, weekly schedule and calendar summary models."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HHMM = re.compile(r"^([01]\d|2[0-4]):([0-5]\d)$")


class AvailabilityType(str, Enum):
    OPEN = "open"
    REST = "rest"


class TimeWindow(BaseModel):
    """An open window within one day, ``HH:MM`` to ``HH:MM``.

    An end of ``00:00`` or ``24:00`` means midnight at the end of the day.
    """

    model_config = ConfigDict(frozen=True)

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _check_hhmm(cls, value: str) -> str:
        match = _HHMM.match(value)
        if not match or (match.group(1) == "24" and match.group(2) != "00"):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "TimeWindow":
        if self.start == "24:00":
            raise ValueError("window cannot start at 24:00")
        if self.end not in ("00:00", "24:00") and self.end <= self.start:
            raise ValueError(f"window end {self.end} must be after start {self.start}")
        return self


class DayAvailability(BaseModel):
    """Open/rest answer for one calendar date.

    Used both for admin per-date overrides and for the effective
    availability the resolver derives from them.
    """

    model_config = ConfigDict(frozen=True)

    type: AvailabilityType
    slots: list[TimeWindow] = Field(default_factory=list)

    @classmethod
    def rest(cls) -> "DayAvailability":
        return cls(type=AvailabilityType.REST)

    @classmethod
    def open(cls, *windows: tuple[str, str]) -> "DayAvailability":
        return cls(
            type=AvailabilityType.OPEN,
            slots=[TimeWindow(start=start, end=end) for start, end in windows],
        )

    @property
    def is_rest(self) -> bool:
        return self.type == AvailabilityType.REST


class WeekdaySchedule(BaseModel):
    """Default schedule entry for one weekday."""

    model_config = ConfigDict(frozen=True)

    is_open: bool
    slots: list[TimeWindow] = Field(default_factory=list)


class HourStatus(str, Enum):
    AVAILABLE = "available"
    FULL = "full"
    REST = "rest"
    UNAVAILABLE = "unavailable"


class UnavailableReason(str, Enum):
    EXPIRED = "expired"
    NOT_YET_OPEN = "not_yet_open"


_STATUS_LABELS = {
    HourStatus.FULL: "Full",
    HourStatus.REST: "Closed",
}

_REASON_LABELS = {
    UnavailableReason.EXPIRED: "Expired",
    UnavailableReason.NOT_YET_OPEN: "Not yet open",
}


class HourSummary(BaseModel):
    """Display-ready status for one calendar cell. Carries no booking identities."""

    model_config = ConfigDict(frozen=True)

    date: str
    hour: int
    status: HourStatus
    count: Optional[int] = None
    reason: Optional[UnavailableReason] = None

    @property
    def label(self) -> str:
        if self.status == HourStatus.AVAILABLE:
            return f"{self.count} open"
        if self.status == HourStatus.UNAVAILABLE and self.reason is not None:
            return _REASON_LABELS[self.reason]
        return _STATUS_LABELS.get(self.status, self.status.value)
