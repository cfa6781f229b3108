"""
Entity Data Models — Read-only snapshots served by the program data service.

Status and severity fields are plain strings rather than enums: the data
service may introduce new values, and an unknown value must classify as
"not an issue" instead of failing validation. The enums below name the
values the engine actually matches on.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from pulse.models.base_models import CamelModel


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MilestoneStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AT_RISK = "at_risk"
    COMPLETED = "completed"
    DELAYED = "delayed"


class DependencyStatus(str, Enum):
    BLOCKED = "blocked"
    AT_RISK = "at_risk"
    ON_TRACK = "on_track"
    COMPLETED = "completed"


class ProgramStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Risk(CamelModel):
    """A program risk. Probability and impact are on a 1-4 scale."""

    id: str | None = None
    title: str = ""
    program_id: str | None = None
    severity: str | None = Field(
        default=Severity.MEDIUM.value, description="low | medium | high | critical"
    )
    probability: int | None = None
    impact: int | None = None
    status: str | None = Field(
        default="identified",
        description="identified | in_progress | mitigated | resolved | accepted",
    )


class Milestone(CamelModel):
    """A dated program milestone."""

    id: str | None = None
    title: str = ""
    program_id: str | None = None
    due_date: datetime | None = None
    status: str | None = MilestoneStatus.NOT_STARTED.value


class Dependency(CamelModel):
    """An upstream/downstream dependency of a program."""

    id: str | None = None
    title: str = ""
    program_id: str | None = None
    status: str | None = DependencyStatus.ON_TRACK.value


class Adopter(CamelModel):
    """A team adopting the program's deliverables."""

    id: str | None = None
    team_name: str = ""
    program_id: str | None = None
    readiness_score: float | None = Field(default=None, description="0-100")
    status: str | None = "not_started"


class Program(CamelModel):
    """Program header fields used by the completeness check and the dashboard."""

    id: str
    name: str = ""
    description: str | None = None
    status: str | None = ProgramStatus.ACTIVE.value
    owner_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    objectives: Any = None
    kpis: Any = None
