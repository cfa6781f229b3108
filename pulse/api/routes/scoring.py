"""
Scoring Routes — Stateless engine endpoints.

  POST /health-score          → HealthMetrics for posted collections
  POST /risk-matrix           → RiskMatrixView for posted risks
  GET  /health-bands/{score}  → status, badge and progress color for a score
"""

from __future__ import annotations

from fastapi import APIRouter, Path

from pulse.core.classification import describe_score
from pulse.core.health_scorer import compute_health
from pulse.core.risk_matrix import build_risk_matrix, matrix_view
from pulse.models.health_models import HealthBandView, HealthMetrics
from pulse.models.matrix_models import RiskMatrixView
from pulse.models.report_models import HealthScoreRequest, RiskMatrixRequest

router = APIRouter()


@router.post("/health-score", response_model=HealthMetrics)
async def health_score(req: HealthScoreRequest):
    """Score posted entity collections."""
    return compute_health(
        req.risks,
        req.milestones,
        req.dependencies,
        missing_components=req.missing_components,
    )


@router.post("/risk-matrix", response_model=RiskMatrixView)
async def risk_matrix(req: RiskMatrixRequest):
    """Bucket posted risks into the heatmap grid."""
    return matrix_view(build_risk_matrix(req.risks))


@router.get("/health-bands/{score}", response_model=HealthBandView)
async def health_bands(score: int = Path(..., ge=0, le=100)):
    """Display classification for a precomputed score."""
    return describe_score(score)
