"""
Report Worker — Orchestrates fetch → score → narrative for the API.

Flow for a program report:
1. Fetch the program snapshot from the data service
2. Build the deterministic report (score, badge, matrix, template summary)
3. If narratives are enabled, the gateway is configured and the score is
   below the threshold, ask the LLM to rewrite the summary
4. Validate the narrative against the computed health; keep the template
   summary on any failure
"""

from __future__ import annotations

import logging
import time
from datetime import datetime

from pulse.clients.data_service import DataServiceClient
from pulse.config import settings
from pulse.core.dashboard import compute_dashboard_metrics
from pulse.core.inputs import resolve_now
from pulse.core.report_builder import build_program_report, summarize_program
from pulse.llm.gateway import LLMGateway
from pulse.llm.prompt_builder import build_narrative_prompt, flagged_items
from pulse.llm.response_validator import validate_narrative
from pulse.models.llm_models import NarrativeResult
from pulse.models.report_models import (
    DashboardMetrics,
    ProgramHealthReport,
    ProgramHealthSummary,
    ProgramSnapshot,
)

logger = logging.getLogger("pulse.worker")


class ReportWorker:
    """Builds health reports for the API layer."""

    def __init__(
        self,
        data_client: DataServiceClient,
        llm_gateway: LLMGateway | None = None,
        narrative_enabled: bool | None = None,
        narrative_threshold: int | None = None,
    ) -> None:
        self.data_client = data_client
        self.llm_gateway = llm_gateway
        self.narrative_enabled = (
            settings.narrative_enabled if narrative_enabled is None else narrative_enabled
        )
        self.narrative_threshold = (
            settings.narrative_score_threshold
            if narrative_threshold is None
            else narrative_threshold
        )

    async def run_report(self, program_id: str, now: datetime | None = None) -> ProgramHealthReport:
        """Fetch one program and build its report."""
        start = time.time()
        snapshot = await self.data_client.fetch_snapshot(program_id)
        report = await self.build_report(snapshot, now)
        duration_ms = (time.time() - start) * 1000
        logger.info(
            f"Report for {program_id}: score={report.health.score} "
            f"status={report.health.status.value} summary={report.summary_source} "
            f"in {duration_ms:.0f}ms"
        )
        return report

    async def build_report(
        self, snapshot: ProgramSnapshot, now: datetime | None = None
    ) -> ProgramHealthReport:
        reference = resolve_now(now)
        report = build_program_report(snapshot, reference)

        if self._should_narrate(report):
            narrative = await self._narrate(snapshot, report, reference)
            if narrative.source == "llm":
                report.summary = narrative.text
                report.summary_source = "llm"
                logger.info(
                    f"Narrative for {snapshot.program.id} used {narrative.tokens_used} tokens"
                )

        return report

    async def run_portfolio(self, now: datetime | None = None) -> list[ProgramHealthSummary]:
        """List-card summaries for every program."""
        portfolio = await self.data_client.fetch_portfolio()
        reference = resolve_now(now)
        return [summarize_program(s, reference) for s in portfolio.snapshots()]

    async def run_dashboard(self, now: datetime | None = None) -> DashboardMetrics:
        portfolio = await self.data_client.fetch_portfolio()
        return compute_dashboard_metrics(
            portfolio.programs,
            portfolio.risks,
            portfolio.milestones,
            portfolio.adopters,
            now=now,
            upcoming_days=settings.upcoming_milestone_days,
        )

    def _should_narrate(self, report: ProgramHealthReport) -> bool:
        return (
            self.narrative_enabled
            and self.llm_gateway is not None
            and self.llm_gateway.available
            and report.health.score < self.narrative_threshold
        )

    async def _narrate(
        self,
        snapshot: ProgramSnapshot,
        report: ProgramHealthReport,
        now: datetime,
    ) -> NarrativeResult:
        prompt = build_narrative_prompt(
            snapshot, report.health, report.risk_matrix.matrix, report.missing_components, now
        )
        llm_result = await self.llm_gateway.complete(prompt)

        if not llm_result["success"]:
            logger.warning(
                f"Narrative LLM call failed for {snapshot.program.id}; keeping template summary"
            )
            return NarrativeResult(text=report.summary)

        valid_items = {
            title for titles in flagged_items(snapshot, now).values() for title in titles
        }
        validation = validate_narrative(llm_result["parsed"], report.health, valid_items)
        if not validation.valid or validation.response is None:
            return NarrativeResult(text=report.summary)

        response = validation.response
        text = f"{response.headline} {response.narrative}".strip()
        return NarrativeResult(
            text=text, source="llm", tokens_used=llm_result.get("tokens_used", 0)
        )
