"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from pulse.clients.data_service import DataServiceClient
from pulse.llm.gateway import LLMGateway
from pulse.workers.report_worker import ReportWorker


@lru_cache
def get_data_client() -> DataServiceClient:
    """Shared data service client singleton."""
    return DataServiceClient()


@lru_cache
def get_llm_gateway() -> LLMGateway:
    """Shared LLM gateway singleton."""
    return LLMGateway()


@lru_cache
def get_report_worker() -> ReportWorker:
    """Shared report worker singleton."""
    return ReportWorker(
        data_client=get_data_client(),
        llm_gateway=get_llm_gateway(),
    )
