"""
Persona Engine — Configuration

Loads configuration from environment variables (and an optional .env file)
using Pydantic Settings.  ``get_settings()`` caches one validated instance per
process so call-sites never re-parse the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_FORMATS = {"json", "console"}


class Settings(BaseSettings):
    """Central configuration for the persona engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PERSONA_",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"

    # ------------------------------------------------------------------ #
    # Scoring behaviour
    # ------------------------------------------------------------------ #
    # When False, unanswered questions score as the neutral value 3.
    REQUIRE_COMPLETE_ANSWERS: bool = False

    # Overrides the bundled question bank used by ``load_question_bank()``.
    QUESTION_BANK_PATH: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def _log_format_must_be_known(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError(
                f"LOG_FORMAT must be one of {sorted(_LOG_FORMATS)}, got {v!r}"
            )
        return fmt


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Import this function anywhere you need access to configuration::

        from persona_engine.config import get_settings
        settings = get_settings()
    """
    return Settings()
