"""Configuration for deferred-work.

Configuration is loaded from environment variables and a local `.env` file
(if present).
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_SCORES: list[int] = [1, 3, 4, 6, 7, 1, 10, 11]


class DeferredWorkSettings(BaseSettings):
    """Settings for the demo pipeline and its execution context.

    Environment variables:
    - LOG_LEVEL                       (optional)
    - DEFERRED_WORK_MAX_WORKERS       (optional)
    - DEFERRED_WORK_LATENCY_SECONDS   (optional)
    - DEFERRED_WORK_SEED_SCORES       (optional, JSON list, e.g. "[1, 2, 3]")

    Notes:
        Tests can point at a specific env file via
        `DeferredWorkSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    max_workers: int = Field(
        default=4,
        gt=0,
        validation_alias="DEFERRED_WORK_MAX_WORKERS",
        description="Worker threads in the background queue",
    )

    latency_seconds: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias="DEFERRED_WORK_LATENCY_SECONDS",
        description="Simulated latency added to every data source operation",
    )

    seed_scores: list[int] = Field(
        default_factory=lambda: list(DEFAULT_SEED_SCORES),
        validation_alias="DEFERRED_WORK_SEED_SCORES",
        description="Scores of the items the in-memory data source starts with",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level
