"""
Health Scoring Engine — Reduces a program snapshot to a 0-100 health score.

Score = 100
        - 15 × critical risks       (severity "high" or "critical")
        - 12 × overdue milestones   (due before now, not completed)
        -  8 × blocked dependencies (status "blocked")
        -  5 × missing components
clamped to [0, 100].

This is the only place a health score is computed. Dashboard cards, detail
views, list cards and generated reports all call compute_health().
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pulse.core.classification import classify_score
from pulse.core.inputs import as_utc, coerce_count, coerce_entities, resolve_now
from pulse.models.entity_models import (
    Dependency,
    DependencyStatus,
    Milestone,
    MilestoneStatus,
    Risk,
    Severity,
)
from pulse.models.health_models import HealthBreakdown, HealthMetrics

MAX_SCORE = 100
MIN_SCORE = 0

CRITICAL_RISK_WEIGHT = 15
OVERDUE_MILESTONE_WEIGHT = 12
BLOCKED_DEPENDENCY_WEIGHT = 8
MISSING_COMPONENT_WEIGHT = 5

CRITICAL_SEVERITIES = frozenset({Severity.HIGH.value, Severity.CRITICAL.value})


def is_critical_risk(risk: Risk) -> bool:
    """Exact, case-sensitive match on "high" or "critical"."""
    return risk.severity in CRITICAL_SEVERITIES


def is_overdue(milestone: Milestone, now: datetime) -> bool:
    """Due strictly before `now`. Time of day is NOT truncated."""
    if milestone.due_date is None or milestone.status == MilestoneStatus.COMPLETED.value:
        return False
    return as_utc(milestone.due_date) < now


def is_blocked(dependency: Dependency) -> bool:
    return dependency.status == DependencyStatus.BLOCKED.value


def compute_health(
    risks: Iterable[Risk | dict[str, Any]] | None,
    milestones: Iterable[Milestone | dict[str, Any]] | None,
    dependencies: Iterable[Dependency | dict[str, Any]] | None,
    missing_components: int | None = 0,
    *,
    now: datetime | None = None,
) -> HealthMetrics:
    """
    Compute a program's health score and status.

    Args:
        risks: Program risks (models or mappings); None behaves as empty
        milestones: Program milestones; None behaves as empty
        dependencies: Program dependencies; None behaves as empty
        missing_components: Precomputed count of missing program components;
            None is 0, a whole-valued float is accepted
        now: Reference moment for overdue checks (defaults to current UTC time)

    Returns:
        HealthMetrics with the clamped score and the unclamped breakdown.

    Raises:
        pydantic.ValidationError: an entity is neither a model nor a valid mapping,
            or missing_components is negative or fractional.
    """
    reference = resolve_now(now)
    risk_list = coerce_entities(risks, Risk)
    milestone_list = coerce_entities(milestones, Milestone)
    dependency_list = coerce_entities(dependencies, Dependency)
    missing = coerce_count(missing_components)

    critical_risks = sum(1 for r in risk_list if is_critical_risk(r))
    overdue_milestones = sum(1 for m in milestone_list if is_overdue(m, reference))
    blocked_dependencies = sum(1 for d in dependency_list if is_blocked(d))

    score = MAX_SCORE
    score -= critical_risks * CRITICAL_RISK_WEIGHT
    score -= overdue_milestones * OVERDUE_MILESTONE_WEIGHT
    score -= blocked_dependencies * BLOCKED_DEPENDENCY_WEIGHT
    score -= missing * MISSING_COMPONENT_WEIGHT
    score = max(MIN_SCORE, min(MAX_SCORE, score))

    band = classify_score(score)
    return HealthMetrics(
        score=score,
        status=band.status,
        color=band.text_color,
        breakdown=HealthBreakdown(
            critical_risks=critical_risks,
            overdue_milestones=overdue_milestones,
            blocked_dependencies=blocked_dependencies,
            missing_components=missing,
        ),
    )
