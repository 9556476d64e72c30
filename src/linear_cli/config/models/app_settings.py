"""Validation and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ValidationSettings(BaseModel):
    """GraphQL pre-flight validation behavior.

    ``strict`` turns validation errors into hard failures instead of log
    lines. ``dev_mode`` logs every finding; when unset the
    LINEAR_CLI_ENV=development environment variable decides.
    """

    enabled: bool = Field(default=True, description="Validate queries before sending")
    strict: bool = Field(default=False, description="Fail on validation errors")
    dev_mode: bool | None = Field(default=None, description="Log validation findings")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level


__all__ = [
    "LoggingSettings",
    "ValidationSettings",
]
