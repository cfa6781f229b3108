"""
Service Health Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from pulse.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness check endpoint."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "data_service": settings.data_service_url,
        "narrative_enabled": settings.narrative_enabled,
    }
