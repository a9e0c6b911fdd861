"""Service plan data models."""

from pydantic import BaseModel, ConfigDict, Field


class Plan(BaseModel):
    """A bookable service offering with a fixed duration and rest buffer."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    duration_minutes: int = Field(gt=0)
    rest_minutes: int = Field(default=0, ge=0)
    price: int = Field(default=0, ge=0)
    description: str = ""

    @property
    def total_minutes(self) -> int:
        """Minutes the plan occupies on the calendar, buffer included."""
        return self.duration_minutes + self.rest_minutes


class PlanCategory(BaseModel):
    """A titled group of plans, as presented after the questionnaire."""

    id: str
    title: str
    plans: list[Plan] = Field(default_factory=list)
