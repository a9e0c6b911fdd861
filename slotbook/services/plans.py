"""Plan catalog with durations, rest buffers, prices and descriptions."""

import logging
from typing import Optional

from slotbook.schemas.plan_schema import Plan, PlanCategory

logger = logging.getLogger(__name__)


class PlanNotFoundError(LookupError):
    """Raised when a plan id is not in the catalog."""


PLAN_CATALOG: list[PlanCategory] = [
    PlanCategory(
        id="experience",
        title="Trial Sessions",
        plans=[
            Plan(
                id="rec_experience_10",
                name="Trial (10 min)",
                description="A quick taste of the first relaxation effects.",
                duration_minutes=10,
                rest_minutes=5,
                price=300,
            ),
            Plan(
                id="rec_experience_30",
                name="Trial (30 min)",
                description="Basic session loosening up a single area.",
                duration_minutes=30,
                rest_minutes=10,
                price=800,
            ),
        ],
    ),
    PlanCategory(
        id="half_body",
        title="Systematic Half-Body Release",
        plans=[
            Plan(
                id="rec_half_body",
                name="Half-Body Release (60 min)",
                description="Systematic work on either the upper or the lower body.",
                duration_minutes=60,
                rest_minutes=15,
                price=1500,
            ),
        ],
    ),
    PlanCategory(
        id="full_body",
        title="Full-Body Release",
        plans=[
            Plan(
                id="rec_full_body",
                name="Full-Body Release (120 min)",
                description="Head-to-toe deep session to release accumulated tension.",
                duration_minutes=120,
                rest_minutes=20,
                price=2800,
            ),
        ],
    ),
]


def get_all_plans() -> list[Plan]:
    """Return every plan across all categories, in catalog order."""
    return [plan for category in PLAN_CATALOG for plan in category.plans]


def get_plan(plan_id: str) -> Optional[Plan]:
    for plan in get_all_plans():
        if plan.id == plan_id:
            return plan
    return None


def require_plan(plan_id: str) -> Plan:
    plan = get_plan(plan_id)
    if plan is None:
        logger.warning("Unknown plan requested: %s", plan_id)
        raise PlanNotFoundError(f"Plan {plan_id!r} not found.")
    return plan


def find_plan_category(plan_id: str) -> Optional[PlanCategory]:
    for category in PLAN_CATALOG:
        if any(plan.id == plan_id for plan in category.plans):
            return category
    return None
