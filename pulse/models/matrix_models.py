"""
Risk Matrix Data Models — 3x4 probability-by-impact grid.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import Field

from pulse.models.base_models import CamelModel


class ProbabilityBand(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImpactBand(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ImpactCounts(CamelModel):
    """One probability row of the matrix."""

    low: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)


class RiskMatrix(CamelModel):
    """Risk counts keyed by probability band, then impact band.

    Rows are declared top-down as the heatmap draws them.
    """

    high: ImpactCounts = Field(default_factory=ImpactCounts)
    medium: ImpactCounts = Field(default_factory=ImpactCounts)
    low: ImpactCounts = Field(default_factory=ImpactCounts)

    def row(self, probability: ProbabilityBand | str) -> ImpactCounts:
        return getattr(self, ProbabilityBand(probability).value)

    def count(self, probability: ProbabilityBand | str, impact: ImpactBand | str) -> int:
        return getattr(self.row(probability), ImpactBand(impact).value)

    def increment(self, probability: ProbabilityBand, impact: ImpactBand) -> None:
        row = self.row(probability)
        setattr(row, impact.value, getattr(row, impact.value) + 1)

    def cells(self) -> Iterator[tuple[ProbabilityBand, ImpactBand, int]]:
        """Yield (probability, impact, count) for all 12 cells, high row first."""
        for probability in (ProbabilityBand.HIGH, ProbabilityBand.MEDIUM, ProbabilityBand.LOW):
            for impact in ImpactBand:
                yield probability, impact, self.count(probability, impact)

    def total(self) -> int:
        return sum(count for _, _, count in self.cells())


class MatrixCell(CamelModel):
    """A single heatmap cell with its severity tint."""

    probability: ProbabilityBand
    impact: ImpactBand
    count: int = Field(..., ge=0)
    color_class: str


class RiskMatrixView(CamelModel):
    """Matrix plus pre-classified cells, ready to render."""

    matrix: RiskMatrix
    cells: list[MatrixCell] = Field(default_factory=list)
    total_risks: int = Field(default=0, ge=0)
