"""
Central configuration.

Pydantic models give us validation for free, values can be overridden through environment variables:

* BOARDGAMES_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
* BOARDGAMES_OUTCOME_PERSPECTIVE: opponent (default) or mover
"""

import os
from typing import Optional, Self

from pydantic import BaseModel, Field, field_validator

from src.core.shared_types import OutcomePerspective

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string handed to logging.Formatter",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: object) -> str:
        level = str(value).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return level


class RulesSettings(BaseModel):
    """Knobs that change how the chess engine reports results."""

    outcome_perspective: OutcomePerspective = Field(
        default=OutcomePerspective.OPPONENT,
        description="Whose king is classified after every accepted move",
    )


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            logging=LoggingSettings(
                log_level=os.getenv("BOARDGAMES_LOG_LEVEL", "WARNING"),
            ),
            rules=RulesSettings(
                outcome_perspective=os.getenv(
                    "BOARDGAMES_OUTCOME_PERSPECTIVE", OutcomePerspective.OPPONENT
                ),
            ),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (tests change the environment in between)."""
    global _settings
    _settings = None
