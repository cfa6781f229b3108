"""
Completeness Checker — Lists the essential components a program lacks.

The number of labels returned is what compute_health() deducts for as
missing components.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pulse.core.inputs import coerce_entities
from pulse.models.entity_models import Adopter, Milestone, Program

MIN_DESCRIPTION_LENGTH = 10


def _is_empty_collection(value: Any) -> bool:
    # An object-shaped value (e.g. {"q1": ...}) counts as present even when empty.
    if isinstance(value, dict):
        return False
    return not value


def detect_missing_components(
    program: Program | dict[str, Any],
    milestones: Iterable[Milestone | dict[str, Any]] | None = None,
    adopters: Iterable[Adopter | dict[str, Any]] | None = None,
) -> list[str]:
    """Return missing component labels in a fixed order."""
    if not isinstance(program, Program):
        program = Program.model_validate(program)
    milestone_list = coerce_entities(milestones, Milestone)
    adopter_list = coerce_entities(adopters, Adopter)

    missing: list[str] = []
    if not program.description or len(program.description.strip()) < MIN_DESCRIPTION_LENGTH:
        missing.append("Description")
    if not program.owner_id:
        missing.append("Owner")
    if not program.start_date:
        missing.append("Start Date")
    if not program.end_date:
        missing.append("End Date")
    if _is_empty_collection(program.objectives):
        missing.append("Objectives")
    if _is_empty_collection(program.kpis):
        missing.append("KPIs")
    if not milestone_list:
        missing.append("Milestones")
    if not adopter_list:
        missing.append("Adopter Teams")
    return missing
