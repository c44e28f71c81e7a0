"""
Configuration models.

Provides Pydantic models for helmrun configuration sections with validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from ...utils.durations import parse_duration
from .base import HelmRunBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(HelmRunBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


def _validate_duration(v: Any) -> str | None:
    if v is None or v == "":
        return None
    v = str(v).strip()
    parse_duration(v)  # raises DurationFormatError (a ValueError)
    return v


class HelmConfig(ConfigBaseModel):
    """Defaults applied to every helm invocation."""

    binary: str = "helm"
    namespace: str | None = None
    kubeconfig: str | None = None
    timeout: str | None = None
    repos: list[str] = Field(default_factory=list)

    @field_validator("timeout", mode="before")
    @classmethod
    def validate_timeout(cls, v: Any) -> str | None:
        """Timeouts must be Go-style duration strings."""
        return _validate_duration(v)

    @field_validator("repos", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v if v else []


class ExecutionConfig(ConfigBaseModel):
    """Subprocess execution settings."""

    poll_interval: float = Field(default=0.1, gt=0)
    terminate_grace_period: float = Field(default=5.0, ge=0)
    deadline: str | None = None

    @field_validator("deadline", mode="before")
    @classmethod
    def validate_deadline(cls, v: Any) -> str | None:
        """Deadlines must be Go-style duration strings."""
        return _validate_duration(v)


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "info"
    console: bool = True
    file: bool = False
    file_path: Path | None = None
