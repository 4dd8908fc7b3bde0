"""
PsyScore — Engine Configuration

Loads runtime configuration from environment variables (and an optional .env
file) using Pydantic Settings.  A cached ``get_settings()`` helper is provided
so that every call-site (the scoring engine factory, the CLI) receives the
same validated instance without re-parsing the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the PsyScore engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------------ #
    # Research database
    # ------------------------------------------------------------------ #
    # Empty -> use the bundled research norms shipped with the package.
    RESEARCH_NORMS_PATH: str = ""

    # ------------------------------------------------------------------ #
    # Sub-score jitter (sensory / executive-function profiles)
    # ------------------------------------------------------------------ #
    JITTER_ENABLED: bool = False
    JITTER_SEED: Optional[int] = None

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime::

        from psyscore.config import get_settings
        settings = get_settings()
    """
    return Settings()
