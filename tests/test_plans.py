"""Tests for the plan catalog and data models."""

import pytest
from pydantic import ValidationError

from slotbook.schemas.booking_schema import BookingRequest
from slotbook.schemas.plan_schema import Plan
from slotbook.services.plans import (
    PLAN_CATALOG,
    PlanNotFoundError,
    find_plan_category,
    get_all_plans,
    get_plan,
    require_plan,
)


class TestCatalog:
    def test_all_plans_in_catalog_order(self):
        assert [p.id for p in get_all_plans()] == [
            "rec_experience_10", "rec_experience_30", "rec_half_body", "rec_full_body",
        ]

    def test_get_plan(self):
        plan = get_plan("rec_full_body")
        assert (plan.duration_minutes, plan.rest_minutes, plan.price) == (120, 20, 2800)
        assert plan.total_minutes == 140

    def test_unknown_plan(self):
        assert get_plan("nope") is None
        with pytest.raises(PlanNotFoundError):
            require_plan("nope")

    def test_find_category(self):
        assert find_plan_category("rec_experience_30").id == "experience"
        assert find_plan_category("nope") is None

    def test_catalog_ids_unique(self):
        ids = [p.id for c in PLAN_CATALOG for p in c.plans]
        assert len(ids) == len(set(ids))


class TestModels:
    def test_plan_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            Plan(id="x", name="x", duration_minutes=0)

    def test_plan_rest_non_negative(self):
        with pytest.raises(ValidationError):
            Plan(id="x", name="x", duration_minutes=30, rest_minutes=-5)

    def test_booking_request_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            BookingRequest(start_time="2025-08-11T10:00:00", name="  ", contact="0912345678")
