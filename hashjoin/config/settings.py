"""Typed engine settings using Pydantic for validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from hashjoin.logging_config import LEVEL_MAP, LOG_FORMATS

DEFAULT_STRATEGY = "only_smallest"
DEFAULT_OUTPUT_FILE = "result.csv"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    format: str = "human"
    file: Optional[str] = None

    @field_validator("level")
    def _validate_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LEVEL_MAP:
            raise ValueError(
                f"Invalid log level '{value}'. Valid options: {', '.join(LEVEL_MAP)}"
            )
        return normalized

    @field_validator("format")
    def _validate_format(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format '{value}'. Valid options: {', '.join(LOG_FORMATS)}"
            )
        return normalized


class EngineSettings(BaseModel):
    """Defaults applied when a command leaves something out."""

    model_config = ConfigDict(extra="forbid")

    default_strategy: str = DEFAULT_STRATEGY
    default_output: str = DEFAULT_OUTPUT_FILE
    logging: LoggingSettings = LoggingSettings()

    @field_validator("default_strategy", "default_output")
    def _require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()
