"""
Plan progress checks.

A respondent may only start a new assessment once the accepted plan has
run for its full duration.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from .base import TherapyPlan

SECONDS_PER_DAY = 60 * 60 * 24


def days_elapsed(plan: TherapyPlan, now: datetime) -> int:
    """Whole days since the plan started (0 if it has not started)."""
    if plan.start_date is None:
        return 0
    return int((now - plan.start_date).total_seconds() // SECONDS_PER_DAY)


def days_remaining(plan: Optional[TherapyPlan], now: datetime) -> int:
    if plan is None or plan.start_date is None:
        return 0
    return max(0, plan.plan_duration_days - days_elapsed(plan, now))


def is_plan_completed(plan: Optional[TherapyPlan], now: datetime) -> bool:
    """True when there is no running plan or it has lasted plan_duration_days."""
    if plan is None or plan.start_date is None:
        return True
    return days_elapsed(plan, now) >= plan.plan_duration_days
