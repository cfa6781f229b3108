"""
Tests for Report Worker — fetch, score and narrative fallback behavior.
"""

import asyncio

import pytest

from pulse.clients.data_service import ProgramNotFoundError
from pulse.models.report_models import Portfolio
from pulse.workers.report_worker import ReportWorker

from conftest import FakeDataClient, FakeGateway


def _valid_narrative(score=65, status="Good"):
    return {
        "score": score,
        "status": status,
        "headline": "Apollo needs attention.",
        "narrative": "Pilot cutover slipped and Network ACLs are blocked.",
        "recommended_actions": ["Escalate Network ACLs"],
        "referenced_items": ["Pilot cutover", "Network ACLs"],
    }


def _worker(snapshot, gateway=None, enabled=True, threshold=80):
    return ReportWorker(
        data_client=FakeDataClient(snapshots=[snapshot]),
        llm_gateway=gateway,
        narrative_enabled=enabled,
        narrative_threshold=threshold,
    )


def test_report_uses_template_when_narrative_disabled(troubled_snapshot, now):
    gateway = FakeGateway(parsed=_valid_narrative())
    worker = _worker(troubled_snapshot, gateway, enabled=False)
    report = asyncio.run(worker.run_report("prog-1", now))
    assert report.health.score == 65
    assert report.summary_source == "template"
    assert gateway.prompts == []


def test_report_uses_llm_narrative_when_valid(troubled_snapshot, now):
    gateway = FakeGateway(parsed=_valid_narrative())
    report = asyncio.run(_worker(troubled_snapshot, gateway).run_report("prog-1", now))
    assert report.summary_source == "llm"
    assert report.summary.startswith("Apollo needs attention.")
    # Engine output is untouched by the narrative
    assert report.health.score == 65
    assert "Vendor SLA gap" in gateway.prompts[0]


def test_invalid_narrative_falls_back_to_template(troubled_snapshot, now):
    gateway = FakeGateway(parsed=_valid_narrative(score=90, status="Excellent"))
    report = asyncio.run(_worker(troubled_snapshot, gateway).run_report("prog-1", now))
    assert report.summary_source == "template"
    assert report.summary.startswith("Apollo health is 65/100 (Good).")


@pytest.mark.parametrize("parsed", [["not", "an", "object"], "Apollo is fine", 65])
def test_non_object_narrative_falls_back_to_template(troubled_snapshot, now, parsed):
    gateway = FakeGateway(parsed=parsed)
    report = asyncio.run(_worker(troubled_snapshot, gateway).run_report("prog-1", now))
    assert report.summary_source == "template"
    assert report.summary.startswith("Apollo health is 65/100 (Good).")
    assert len(gateway.prompts) == 1


def test_failed_llm_call_falls_back_to_template(troubled_snapshot, now):
    gateway = FakeGateway(parsed=None, success=False)
    report = asyncio.run(_worker(troubled_snapshot, gateway).run_report("prog-1", now))
    assert report.summary_source == "template"
    assert len(gateway.prompts) == 1


def test_healthy_program_skips_llm(healthy_snapshot, now):
    gateway = FakeGateway(parsed=_valid_narrative(score=100, status="Excellent"))
    report = asyncio.run(_worker(healthy_snapshot, gateway).run_report("prog-1", now))
    assert report.health.score == 100
    assert report.summary_source == "template"
    assert gateway.prompts == []


def test_unconfigured_gateway_skips_llm(troubled_snapshot, now):
    gateway = FakeGateway(parsed=_valid_narrative(), available=False)
    report = asyncio.run(_worker(troubled_snapshot, gateway).run_report("prog-1", now))
    assert report.summary_source == "template"
    assert gateway.prompts == []


def test_unknown_program_raises(troubled_snapshot, now):
    with pytest.raises(ProgramNotFoundError):
        asyncio.run(_worker(troubled_snapshot).run_report("nope", now))


def test_portfolio_and_dashboard(troubled_snapshot, now):
    zephyr = troubled_snapshot.program.model_copy(
        update={"id": "prog-2", "name": "Zephyr", "status": "on_hold"}
    )
    portfolio = Portfolio(
        programs=[troubled_snapshot.program, zephyr],
        risks=troubled_snapshot.risks,
        milestones=troubled_snapshot.milestones,
        dependencies=troubled_snapshot.dependencies,
        adopters=troubled_snapshot.adopters,
    )
    worker = ReportWorker(data_client=FakeDataClient(portfolio=portfolio), narrative_enabled=False)

    cards = asyncio.run(worker.run_portfolio(now))
    assert [c.program_id for c in cards] == ["prog-1", "prog-2"]
    assert cards[0].score == 65
    # prog-2 owns no milestones or adopters
    assert cards[1].score == 90

    metrics = asyncio.run(worker.run_dashboard(now))
    assert metrics.active_programs == 1
    assert metrics.critical_risks == 1
    assert metrics.upcoming_milestones == 0
    assert metrics.adopter_score == 80
