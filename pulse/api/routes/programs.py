"""
Program Routes — Health views backed by the data service.

  GET /programs/health               → list-card summaries
  GET /programs/{program_id}/report  → full health report
  GET /dashboard/metrics             → portfolio counters
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from pulse.api.dependencies import get_report_worker
from pulse.clients.data_service import DataServiceError, ProgramNotFoundError
from pulse.models.report_models import DashboardMetrics, ProgramHealthReport, ProgramHealthSummary
from pulse.workers.report_worker import ReportWorker

logger = logging.getLogger("pulse.api.programs")

router = APIRouter()


@router.get("/programs/health", response_model=list[ProgramHealthSummary])
async def programs_health(worker: ReportWorker = Depends(get_report_worker)):
    """Health summary for every program."""
    try:
        return await worker.run_portfolio()
    except DataServiceError as e:
        logger.error(f"Portfolio fetch failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/programs/{program_id}/report", response_model=ProgramHealthReport)
async def program_report(program_id: str, worker: ReportWorker = Depends(get_report_worker)):
    """Full health report for one program."""
    try:
        return await worker.run_report(program_id)
    except ProgramNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DataServiceError as e:
        logger.error(f"Snapshot fetch failed for {program_id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/dashboard/metrics", response_model=DashboardMetrics)
async def dashboard_metrics(worker: ReportWorker = Depends(get_report_worker)):
    """Portfolio counters for the dashboard header."""
    try:
        return await worker.run_dashboard()
    except DataServiceError as e:
        logger.error(f"Dashboard fetch failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
