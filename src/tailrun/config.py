"""Configuration management for tailrun."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_LINES = 4
DEFAULT_TICK_MS = 200

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TAILRUN_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Display Configuration
    max_lines: int = Field(default=DEFAULT_MAX_LINES, ge=1, description="Number of output lines kept in the live box")
    tick_ms: int = Field(default=DEFAULT_TICK_MS, gt=0, description="Redraw interval of the live box in milliseconds")
    min_width: int = Field(default=20, ge=1, description="Smallest inner width of the live box")
    fallback_columns: int = Field(default=80, ge=1, description="Terminal width used when it cannot be detected")
    show_tail_on_failure: bool = Field(default=True, description="Print the last lines again when the command fails")

    # Dump Configuration
    dump_dir: Optional[Path] = Field(None, description="Directory for the output dump (defaults to the temp dir)")
    dump_prefix: str = Field(default="tailrun-", description="File name prefix of the output dump")

    # Logging Configuration
    log_level: LogLevel = Field(default="WARNING", description="Log level")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Explicit values that win over the environment and ``.env``.
            ``None`` values are ignored so CLI options can be passed through as-is.

    Returns:
        Settings instance
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**values)
