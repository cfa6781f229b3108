"""
Health Scoring Data Models — Score, status and display tokens.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from pulse.models.base_models import CamelModel


class HealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    AT_RISK = "At Risk"


class HealthBreakdown(CamelModel):
    """Issue counts behind a score. Never clamped."""

    critical_risks: int = Field(default=0, ge=0)
    overdue_milestones: int = Field(default=0, ge=0)
    blocked_dependencies: int = Field(default=0, ge=0)
    missing_components: int = Field(default=0, ge=0)


class HealthMetrics(CamelModel):
    """Result of compute_health()."""

    score: int = Field(..., ge=0, le=100, description="Health score 0-100")
    status: HealthStatus
    color: str = Field(..., description="Text color token for the score")
    breakdown: HealthBreakdown = Field(default_factory=HealthBreakdown)


class HealthBadge(CamelModel):
    """Badge label and styling for a score."""

    label: HealthStatus
    color_class: str


class HealthBandView(CamelModel):
    """Every display classification of a single score."""

    score: int
    status: HealthStatus
    color: str
    badge: HealthBadge
    progress_color: str
