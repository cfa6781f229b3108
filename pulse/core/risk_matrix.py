"""
Risk Matrix Builder — Buckets risks into a 3x4 probability × impact grid.

Probability:  <=1 low    <=3 medium    else high
Impact:       <=1 low    <=2 medium    <=3 high    else critical

An unset probability or impact (None or 0) resolves to 2 before bucketing,
which puts a risk with neither field in the (medium, medium) cell. Every
risk lands in exactly one cell.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pulse.core.inputs import coerce_entities
from pulse.models.entity_models import Risk
from pulse.models.matrix_models import (
    ImpactBand,
    MatrixCell,
    ProbabilityBand,
    RiskMatrix,
    RiskMatrixView,
)

DEFAULT_PROBABILITY = 2
DEFAULT_IMPACT = 2

NEUTRAL_CELL = "bg-gray-100"
LOW_CELL = "bg-success text-white"
MEDIUM_CELL = "bg-warning"
HIGH_CELL = "bg-danger text-white"


def probability_band(probability: int | None) -> ProbabilityBand:
    value = probability or DEFAULT_PROBABILITY
    if value <= 1:
        return ProbabilityBand.LOW
    if value <= 3:
        return ProbabilityBand.MEDIUM
    return ProbabilityBand.HIGH


def impact_band(impact: int | None) -> ImpactBand:
    value = impact or DEFAULT_IMPACT
    if value <= 1:
        return ImpactBand.LOW
    if value <= 2:
        return ImpactBand.MEDIUM
    if value <= 3:
        return ImpactBand.HIGH
    return ImpactBand.CRITICAL


def build_risk_matrix(risks: Iterable[Risk | dict[str, Any]] | None) -> RiskMatrix:
    """
    Count risks per (probability band, impact band) cell.

    Raises:
        pydantic.ValidationError: a risk is neither a Risk nor a valid mapping.
    """
    matrix = RiskMatrix()
    for risk in coerce_entities(risks, Risk):
        matrix.increment(probability_band(risk.probability), impact_band(risk.impact))
    return matrix


def cell_color(count: int) -> str:
    """Heatmap tint for a cell, by count alone."""
    if count <= 0:
        return NEUTRAL_CELL
    if count <= 2:
        return LOW_CELL
    if count <= 4:
        return MEDIUM_CELL
    return HIGH_CELL


def matrix_view(matrix: RiskMatrix) -> RiskMatrixView:
    """Attach a color class to each of the 12 cells."""
    cells = [
        MatrixCell(probability=p, impact=i, count=count, color_class=cell_color(count))
        for p, i, count in matrix.cells()
    ]
    return RiskMatrixView(matrix=matrix, cells=cells, total_risks=matrix.total())
