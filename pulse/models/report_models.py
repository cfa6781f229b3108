"""
Report and Request Models — API contract schemas.

These are the public-facing Pydantic models used by FastAPI endpoints.
Field names serialize as camelCase to match the dashboard client.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from pulse.models.base_models import CamelModel
from pulse.models.entity_models import Adopter, Dependency, Milestone, Program, Risk
from pulse.models.health_models import HealthBadge, HealthMetrics
from pulse.models.matrix_models import RiskMatrixView


class HealthScoreRequest(CamelModel):
    """Request body for POST /health-score."""

    risks: list[Risk] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)
    # Accepted for contract compatibility; adopters do not affect the score.
    adopters: list[Adopter] = Field(default_factory=list)
    missing_components: int = Field(default=0, ge=0)


class RiskMatrixRequest(CamelModel):
    """Request body for POST /risk-matrix."""

    risks: list[Risk] = Field(default_factory=list)


class ProgramSnapshot(CamelModel):
    """Everything the data service knows about one program at one moment."""

    program: Program
    risks: list[Risk] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)
    adopters: list[Adopter] = Field(default_factory=list)


class Portfolio(CamelModel):
    """Every program and entity, unfiltered."""

    programs: list[Program] = Field(default_factory=list)
    risks: list[Risk] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)
    adopters: list[Adopter] = Field(default_factory=list)

    def snapshot_for(self, program: Program) -> ProgramSnapshot:
        return ProgramSnapshot(
            program=program,
            risks=[r for r in self.risks if r.program_id == program.id],
            milestones=[m for m in self.milestones if m.program_id == program.id],
            dependencies=[d for d in self.dependencies if d.program_id == program.id],
            adopters=[a for a in self.adopters if a.program_id == program.id],
        )

    def snapshots(self) -> list[ProgramSnapshot]:
        return [self.snapshot_for(p) for p in self.programs]


class ProgramHealthReport(CamelModel):
    """Full health report for the program detail view."""

    program_id: str
    program_name: str = ""
    health: HealthMetrics
    badge: HealthBadge
    progress_color: str
    missing_components: list[str] = Field(default_factory=list)
    risk_matrix: RiskMatrixView
    summary: str = Field(default="", description="Human-readable health summary")
    summary_source: Literal["template", "llm"] = "template"
    generated_at: datetime


class ProgramHealthSummary(CamelModel):
    """Compact health view for program list cards."""

    program_id: str
    program_name: str = ""
    score: int = Field(..., ge=0, le=100)
    status: str
    badge: HealthBadge
    progress_color: str


class DashboardMetrics(CamelModel):
    """Portfolio counters for the dashboard header."""

    active_programs: int = 0
    critical_risks: int = 0
    upcoming_milestones: int = 0
    adopter_score: int = 0
