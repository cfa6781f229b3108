"""
Test fixtures shared across all ProgramPulse tests.
"""

from datetime import datetime, timezone

import pytest

from pulse.models.report_models import ProgramSnapshot

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeDataClient:
    """Stands in for DataServiceClient; serves fixed snapshots."""

    def __init__(self, snapshots=None, portfolio=None, error=None):
        self.snapshots = {s.program.id: s for s in (snapshots or [])}
        self.portfolio = portfolio
        self.error = error

    async def fetch_snapshot(self, program_id):
        from pulse.clients.data_service import ProgramNotFoundError

        if self.error:
            raise self.error
        if program_id not in self.snapshots:
            raise ProgramNotFoundError(program_id)
        return self.snapshots[program_id]

    async def fetch_portfolio(self):
        if self.error:
            raise self.error
        return self.portfolio


class FakeGateway:
    """Stands in for LLMGateway; returns a canned completion."""

    def __init__(self, parsed=None, success=True, available=True):
        self.parsed = parsed
        self.success = success
        self.available = available
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        return {
            "content": "",
            "parsed": self.parsed,
            "tokens_used": 42 if self.success else 0,
            "success": self.success,
        }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def complete_program():
    """A program with every essential component filled in."""
    return {
        "id": "prog-1",
        "name": "Apollo",
        "description": "Platform migration to the new identity stack",
        "status": "active",
        "ownerId": "user-1",
        "startDate": "2026-01-01T00:00:00Z",
        "endDate": "2026-12-31T00:00:00Z",
        "objectives": ["Retire legacy IdP"],
        "kpis": ["Login p95 < 300ms"],
    }


@pytest.fixture
def troubled_snapshot(complete_program):
    """Apollo with one of each issue type: 100 - 15 - 12 - 8 = 65."""
    return ProgramSnapshot.model_validate(
        {
            "program": complete_program,
            "risks": [
                {"id": "r1", "title": "Vendor SLA gap", "programId": "prog-1",
                 "severity": "critical", "probability": 4, "impact": 4},
                {"id": "r2", "title": "Doc drift", "programId": "prog-1",
                 "severity": "low", "probability": 1, "impact": 1},
            ],
            "milestones": [
                {"id": "m1", "title": "Pilot cutover", "programId": "prog-1",
                 "dueDate": "2026-02-01T00:00:00Z", "status": "in_progress"},
                {"id": "m2", "title": "GA", "programId": "prog-1",
                 "dueDate": "2026-06-01T00:00:00Z", "status": "not_started"},
            ],
            "dependencies": [
                {"id": "d1", "title": "Network ACLs", "programId": "prog-1", "status": "blocked"},
                {"id": "d2", "title": "HR feed", "programId": "prog-1", "status": "on_track"},
            ],
            "adopters": [
                {"id": "a1", "teamName": "Payments", "programId": "prog-1", "readinessScore": 80},
            ],
        }
    )


@pytest.fixture
def healthy_snapshot(complete_program):
    """Apollo with no issues at all."""
    return ProgramSnapshot.model_validate(
        {
            "program": complete_program,
            "milestones": [
                {"id": "m2", "title": "GA", "programId": "prog-1",
                 "dueDate": "2026-06-01T00:00:00Z", "status": "not_started"},
            ],
            "adopters": [
                {"id": "a1", "teamName": "Payments", "programId": "prog-1", "readinessScore": 80},
            ],
        }
    )
