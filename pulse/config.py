"""
ProgramPulse Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Scoring weights and health bands are NOT configurable; they live in
pulse.core so every surface computes health the same way.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Data service ──
    data_service_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the program/entity data service",
    )
    data_service_timeout: float = Field(
        default=10.0, description="Data service request timeout in seconds"
    )

    # ── Dashboard ──
    upcoming_milestone_days: int = Field(
        default=7,
        ge=0,
        description="Window (days from now) in which a milestone counts as upcoming",
    )

    # ── Narrative / LLM ──
    narrative_enabled: bool = Field(
        default=False,
        description="Feature flag: rewrite report summaries with the LLM",
    )
    narrative_score_threshold: int = Field(
        default=80,
        description="Only programs scoring below this get an LLM narrative (0-100)",
    )
    groq_api_key: str | None = Field(
        default=None, description="Groq API key for the narrative gateway"
    )
    pulse_model: str = Field(
        default="moonshotai/kimi-k2-instruct-0905",
        description="Model identifier for Groq completions",
    )
    llm_timeout: int = Field(default=30, description="LLM request timeout in seconds")
    llm_max_retries: int = Field(default=3, description="Max LLM retry attempts")
    llm_temperature: float = Field(default=0.2, description="LLM temperature")
    llm_max_tokens: int = Field(
        default=1024, description="Token budget cap per narrative"
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported by other modules
settings = Settings()
