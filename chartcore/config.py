"""Pydantic Settings configuration.

Config hierarchy (lowest to highest priority):
1. Pydantic defaults (below)
2. .env file
3. Environment variables (e.g., CHARTCORE_LOG_LEVEL=DEBUG,
   CHARTCORE_OUTPUT__INDENT=0)

The engine itself takes no configuration; these settings drive the CLI
and logging.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chartcore.types import Timeframe

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class OutputConfig(BaseModel):
    """JSON output formatting for CLI results."""

    indent: int = Field(default=2, ge=0, le=8)

    @property
    def json_indent(self) -> int | None:
        """Indent for json.dumps; 0 means a single compact line."""
        return self.indent or None


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        CHARTCORE_LOG_FORMAT=json
        CHARTCORE_DEFAULT_TIMEFRAME=5m
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARTCORE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_format: str = "console"
    default_timeframe: Timeframe = Timeframe.ONE_MINUTE
    output: OutputConfig = OutputConfig()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v

    @field_validator("default_timeframe", mode="before")
    @classmethod
    def validate_default_timeframe(cls, v: object) -> Timeframe:
        return Timeframe.parse(v)  # type: ignore[arg-type]
