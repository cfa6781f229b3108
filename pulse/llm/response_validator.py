"""
Response Validator — Strict validation for LLM narrative output.

Rejects responses that:
- Fail JSON parsing or the NarrativeResponse schema
- Report a score or status different from the engine's
- Reference items that are not in the flagged-item whitelist
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pulse.models.health_models import HealthMetrics
from pulse.models.llm_models import NarrativeResponse

logger = logging.getLogger("pulse.llm.validator")


class ValidationResult:
    """Result of response validation."""

    def __init__(self) -> None:
        self.valid = True
        self.errors: list[str] = []
        self.response: NarrativeResponse | None = None

    def add_error(self, error: str) -> None:
        self.valid = False
        self.errors.append(error)


def validate_narrative(
    parsed: Any,
    health: HealthMetrics,
    valid_items: set[str],
) -> ValidationResult:
    """
    Validate an LLM narrative against the deterministic health result.

    Args:
        parsed: Parsed JSON from the LLM; anything but an object is rejected
        health: The HealthMetrics the narrative must agree with
        valid_items: Titles of flagged risks, milestones and dependencies

    Returns:
        ValidationResult with .valid, .errors, and .response
    """
    result = ValidationResult()

    if parsed is None:
        result.add_error("LLM returned non-JSON or empty response")
        return result

    if not isinstance(parsed, dict):
        result.add_error(f"LLM returned a JSON {type(parsed).__name__}, expected an object")
        return result

    try:
        response = NarrativeResponse.model_validate(parsed)
    except ValidationError as e:
        result.add_error(f"Schema validation failed: {e}")
        return result

    result.response = response

    if response.score != health.score:
        result.add_error(
            f"Narrative score {response.score} does not match computed score {health.score}"
        )

    if response.status != health.status.value:
        result.add_error(
            f"Narrative status '{response.status}' does not match "
            f"computed status '{health.status.value}'"
        )

    for item in response.referenced_items:
        if item not in valid_items:
            result.add_error(f"Hallucinated item: '{item}' not in flagged items")

    if result.errors:
        logger.warning(
            f"Narrative validation failed with {len(result.errors)} errors: "
            f"{result.errors}"
        )

    return result
