"""Pydantic models for config validation.

``Config.validated()`` turns the merged ``Config.config_data`` into a typed
``CadenceConfig``.  The CLI reads its settings from that model, so bad
values fail at startup; dict-based ``Config.get`` keeps working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    data_file: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "data_file", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser() if v else None
        if isinstance(v, Path):
            return v.expanduser()
        return v


class TrackingConfig(BaseModel):
    """Knobs for the aggregation core."""

    streak_lookback_days: int = 365

    @field_validator("streak_lookback_days")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"streak_lookback_days must be positive, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Loguru sink settings."""

    level: str = "WARNING"
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


class CadenceConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.cadence"))
    tracking: TrackingConfig = TrackingConfig()
    logging: LoggingConfig = LoggingConfig()
