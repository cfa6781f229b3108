"""
Report Builder — Assembles health views from a program snapshot.

Pure: every number comes from compute_health() and build_risk_matrix().
"""

from __future__ import annotations

from datetime import datetime

from pulse.core.classification import badge_for, progress_color_for
from pulse.core.completeness import detect_missing_components
from pulse.core.health_scorer import compute_health
from pulse.core.inputs import resolve_now
from pulse.core.risk_matrix import build_risk_matrix, matrix_view
from pulse.llm.fallback import build_template_summary
from pulse.models.health_models import HealthMetrics
from pulse.models.report_models import ProgramHealthReport, ProgramHealthSummary, ProgramSnapshot


def score_snapshot(
    snapshot: ProgramSnapshot, now: datetime | None = None
) -> tuple[HealthMetrics, list[str]]:
    """Health of a snapshot, with missing components detected from the program itself."""
    missing = detect_missing_components(snapshot.program, snapshot.milestones, snapshot.adopters)
    health = compute_health(
        snapshot.risks,
        snapshot.milestones,
        snapshot.dependencies,
        missing_components=len(missing),
        now=now,
    )
    return health, missing


def build_program_report(
    snapshot: ProgramSnapshot, now: datetime | None = None
) -> ProgramHealthReport:
    """Full detail-view report with a template summary."""
    reference = resolve_now(now)
    health, missing = score_snapshot(snapshot, reference)
    matrix = build_risk_matrix(snapshot.risks)

    return ProgramHealthReport(
        program_id=snapshot.program.id,
        program_name=snapshot.program.name,
        health=health,
        badge=badge_for(health.score),
        progress_color=progress_color_for(health.score),
        missing_components=missing,
        risk_matrix=matrix_view(matrix),
        summary=build_template_summary(snapshot.program.name, health, matrix, missing),
        summary_source="template",
        generated_at=reference,
    )


def summarize_program(
    snapshot: ProgramSnapshot, now: datetime | None = None
) -> ProgramHealthSummary:
    """List-card view of a snapshot."""
    health, _ = score_snapshot(snapshot, now)
    return ProgramHealthSummary(
        program_id=snapshot.program.id,
        program_name=snapshot.program.name,
        score=health.score,
        status=health.status.value,
        badge=badge_for(health.score),
        progress_color=progress_color_for(health.score),
    )
