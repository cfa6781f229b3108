"""
LLM Data Models — Schemas for narrative input/output validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class NarrativeResponse(BaseModel):
    """Validated LLM narrative — strict schema enforcement."""

    score: int = Field(..., ge=0, le=100, description="Must echo the computed score")
    status: str = Field(..., description="Must echo the computed status")
    headline: str = Field(..., min_length=1)
    narrative: str = Field(..., min_length=1)
    recommended_actions: list[str] = Field(default_factory=list)
    referenced_items: list[str] = Field(
        default_factory=list,
        description="Titles of risks/milestones/dependencies the narrative mentions",
    )


class NarrativeResult(BaseModel):
    """Outcome of a narrative request, LLM or template."""

    text: str
    source: str = "template"
    tokens_used: int = 0
