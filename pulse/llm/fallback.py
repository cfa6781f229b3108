"""
Deterministic Fallback — Builds report summaries without an LLM.

Used when:
- The narrative feature flag is off or no API key is configured
- The program scores at or above the narrative threshold
- The LLM fails, times out, or its response fails validation

Template-based: each issue type has a pre-written action hint.
"""

from __future__ import annotations

from pulse.models.health_models import HealthMetrics
from pulse.models.matrix_models import RiskMatrix


ISSUE_TEMPLATES: dict[str, dict[str, str]] = {
    "critical_risks": {
        "noun": "high/critical risk",
        "action": "Review mitigation plans for high and critical risks with their owners.",
    },
    "overdue_milestones": {
        "noun": "overdue milestone",
        "action": "Re-baseline overdue milestones or escalate the blockers behind them.",
    },
    "blocked_dependencies": {
        "noun": "blocked dependency",
        "action": "Escalate blocked dependencies to the upstream teams.",
    },
    "missing_components": {
        "noun": "missing component",
        "action": "Complete the program definition.",
    },
}


def _plural(count: int, noun: str) -> str:
    if count == 1:
        return f"1 {noun}"
    if noun.endswith("y"):
        return f"{count} {noun[:-1]}ies"
    return f"{count} {noun}s"


def recommended_actions(health: HealthMetrics, missing: list[str] | None = None) -> list[str]:
    """One action per issue type present, in deduction order."""
    counts = health.breakdown.model_dump()
    actions: list[str] = []
    for key, template in ISSUE_TEMPLATES.items():
        if counts[key] <= 0:
            continue
        action = template["action"]
        if key == "missing_components" and missing:
            action = f"{action} Add: {', '.join(missing)}."
        actions.append(action)
    return actions


def build_template_summary(
    program_name: str,
    health: HealthMetrics,
    matrix: RiskMatrix,
    missing: list[str] | None = None,
) -> str:
    """One-paragraph summary quoting the engine's numbers verbatim."""
    name = program_name or "Program"
    counts = health.breakdown.model_dump()

    issue_parts = [
        _plural(counts[key], template["noun"])
        for key, template in ISSUE_TEMPLATES.items()
        if counts[key] > 0
    ]
    # missing_components is the last template, so its part is last when present
    if missing and counts["missing_components"] > 0:
        issue_parts[-1] = f"{issue_parts[-1]} ({', '.join(missing)})"

    if issue_parts:
        issues = f"Issues: {', '.join(issue_parts)}."
    else:
        issues = "No open issues."

    total = matrix.total()
    hot = matrix.count("high", "high") + matrix.count("high", "critical")
    if total:
        risk_line = f" Risk matrix holds {_plural(total, 'risk')}"
        risk_line += f", {hot} in the high-probability/high-impact corner." if hot else "."
    else:
        risk_line = ""

    return f"{name} health is {health.score}/100 ({health.status.value}). {issues}{risk_line}"
