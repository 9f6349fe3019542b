"""Centralized configuration via Pydantic Settings.

Loads env vars into a typed Settings instance consumed by the composition
root (registry construction, rule engine, logging setup).
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    LOG_JSON: bool = Field(
        default=False,
        description="Render logs as JSON (production) instead of console output",
    )
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # Extraction
    ENABLED_BANKS: str = Field(
        default="",
        description="Comma-separated bank keys to register (empty = all)",
    )

    # Rules
    RULE_LIST_DELIMITER: str = Field(
        default=",",
        description="Delimiter used by IN / NOT_IN condition values",
    )

    @property
    def enabled_banks(self) -> list[str]:
        """Parse comma-separated bank keys into a lowercase list."""
        return [b.strip().lower() for b in self.ENABLED_BANKS.split(",") if b.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings, overridable in tests."""
    return Settings()
