"""
Prompt Builder — Builds narrative prompts from deterministic engine output.

The LLM never scores anything. It receives the computed HealthMetrics, the
risk matrix, the missing components and the titles of the flagged items,
and only rewrites them as prose.
"""

from __future__ import annotations

import json
from datetime import datetime

from pulse.core.health_scorer import is_blocked, is_critical_risk, is_overdue
from pulse.models.health_models import HealthMetrics
from pulse.models.matrix_models import RiskMatrix
from pulse.models.report_models import ProgramSnapshot


SYSTEM_PROMPT = """\
You are a technical program management assistant writing an executive health update.

The health score, status and issue counts below were computed by a deterministic engine. They are FACTS.

STRICT RULES:
- NEVER recompute, adjust or round the score; echo it exactly
- NEVER change the status label; echo it exactly
- ONLY mention risks, milestones and dependencies listed under FLAGGED ITEMS
- Keep the narrative under 120 words
- Output STRICT JSON matching this schema:

{
  "score": number,
  "status": "exact status label",
  "headline": "one line",
  "narrative": "short paragraph",
  "recommended_actions": ["..."],
  "referenced_items": ["exact titles of flagged items you mention"]
}
"""


def flagged_items(snapshot: ProgramSnapshot, now: datetime) -> dict[str, list[str]]:
    """Titles of the entities that produced deductions."""
    return {
        "critical_risks": [r.title for r in snapshot.risks if is_critical_risk(r) and r.title],
        "overdue_milestones": [
            m.title for m in snapshot.milestones if is_overdue(m, now) and m.title
        ],
        "blocked_dependencies": [
            d.title for d in snapshot.dependencies if is_blocked(d) and d.title
        ],
    }


def build_narrative_prompt(
    snapshot: ProgramSnapshot,
    health: HealthMetrics,
    matrix: RiskMatrix,
    missing: list[str],
    now: datetime,
) -> str:
    """Compose the full narrative prompt."""
    health_data = health.model_dump(mode="json", by_alias=True)
    matrix_data = matrix.model_dump(mode="json")
    items = flagged_items(snapshot, now)

    prompt = f"""{SYSTEM_PROMPT}

=== PROGRAM ===
{json.dumps({"id": snapshot.program.id, "name": snapshot.program.name})}

=== HEALTH (FACTS — do not recompute) ===
{json.dumps(health_data, indent=2)}

=== RISK MATRIX (probability → impact → count) ===
{json.dumps(matrix_data, indent=2)}

=== MISSING COMPONENTS ===
{json.dumps(missing)}

=== FLAGGED ITEMS (whitelist) ===
{json.dumps(items, indent=2)}

Respond with STRICT JSON only. No markdown, no comments, no text outside JSON.
"""
    return prompt
