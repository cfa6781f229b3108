"""
Dashboard Aggregator — Portfolio-wide counters for the dashboard header.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from pulse.core.health_scorer import is_critical_risk
from pulse.core.inputs import as_utc, coerce_entities, resolve_now
from pulse.models.entity_models import Adopter, Milestone, Program, ProgramStatus, Risk
from pulse.models.report_models import DashboardMetrics

ACTIVE_PROGRAM_STATUSES = frozenset({ProgramStatus.ACTIVE.value, ProgramStatus.PLANNING.value})
DEFAULT_UPCOMING_DAYS = 7


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def adopter_readiness(adopters: Iterable[Adopter | dict[str, Any]] | None) -> int:
    """Mean readiness across adopters; unscored adopters count as 0."""
    adopter_list = coerce_entities(adopters, Adopter)
    if not adopter_list:
        return 0
    total = sum(a.readiness_score or 0 for a in adopter_list)
    return _round_half_up(total / len(adopter_list))


def is_upcoming(milestone: Milestone, now: datetime, window: timedelta) -> bool:
    if milestone.due_date is None:
        return False
    return now <= as_utc(milestone.due_date) <= now + window


def compute_dashboard_metrics(
    programs: Iterable[Program | dict[str, Any]] | None,
    risks: Iterable[Risk | dict[str, Any]] | None,
    milestones: Iterable[Milestone | dict[str, Any]] | None,
    adopters: Iterable[Adopter | dict[str, Any]] | None,
    *,
    now: datetime | None = None,
    upcoming_days: int = DEFAULT_UPCOMING_DAYS,
) -> DashboardMetrics:
    """
    Aggregate portfolio counters.

    Critical risks use the same predicate as compute_health(), so the
    header count always matches the sum of per-program breakdowns.
    """
    reference = resolve_now(now)
    window = timedelta(days=upcoming_days)

    program_list = coerce_entities(programs, Program)
    risk_list = coerce_entities(risks, Risk)
    milestone_list = coerce_entities(milestones, Milestone)

    return DashboardMetrics(
        active_programs=sum(1 for p in program_list if p.status in ACTIVE_PROGRAM_STATUSES),
        critical_risks=sum(1 for r in risk_list if is_critical_risk(r)),
        upcoming_milestones=sum(1 for m in milestone_list if is_upcoming(m, reference, window)),
        adopter_score=adopter_readiness(adopters),
    )
