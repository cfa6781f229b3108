"""
Health Classification — Score bands and display tokens.

Status text, text color, badge styling and progress-bar color all read the
same band table, so their boundaries cannot drift apart:

    score >= 80  → Excellent
    score >= 60  → Good
    score >= 40  → Fair
    otherwise    → At Risk

Bands are inclusive lower bounds, evaluated top-down.
"""

from __future__ import annotations

from typing import NamedTuple

from pulse.models.health_models import HealthBadge, HealthBandView, HealthStatus


class HealthBand(NamedTuple):
    floor: int
    status: HealthStatus
    text_color: str
    badge_color: str
    progress_color: str


HEALTH_BANDS: tuple[HealthBand, ...] = (
    HealthBand(80, HealthStatus.EXCELLENT, "text-green-600", "bg-green-100 text-green-800", "bg-green-500"),
    HealthBand(60, HealthStatus.GOOD, "text-blue-600", "bg-blue-100 text-blue-800", "bg-blue-500"),
    HealthBand(40, HealthStatus.FAIR, "text-yellow-600", "bg-yellow-100 text-yellow-800", "bg-yellow-500"),
)

AT_RISK_BAND = HealthBand(0, HealthStatus.AT_RISK, "text-red-600", "bg-red-100 text-red-800", "bg-red-500")


def classify_score(score: float) -> HealthBand:
    """Return the first band whose floor the score reaches."""
    for band in HEALTH_BANDS:
        if score >= band.floor:
            return band
    return AT_RISK_BAND


def status_for(score: float) -> HealthStatus:
    return classify_score(score).status


def color_for(score: float) -> str:
    return classify_score(score).text_color


def badge_for(score: float) -> HealthBadge:
    """Badge label and color class for UI components."""
    band = classify_score(score)
    return HealthBadge(label=band.status, color_class=band.badge_color)


def progress_color_for(score: float) -> str:
    """Progress bar color token."""
    return classify_score(score).progress_color


def describe_score(score: int) -> HealthBandView:
    band = classify_score(score)
    return HealthBandView(
        score=score,
        status=band.status,
        color=band.text_color,
        badge=HealthBadge(label=band.status, color_class=band.badge_color),
        progress_color=band.progress_color,
    )
