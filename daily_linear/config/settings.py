"""
daily-linear Settings Manager - Runtime configuration management.

Settings are read from environment variables (and a ``.env`` file loaded at
package import) with typed defaults.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging Settings."""

    level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(
        default=None, description="Directory for rotating log files; console only when unset"
    )
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(env_prefix="DAILY_LINEAR_LOGGING_")

    @field_validator("level")
    @classmethod
    def valid_log_level(cls, v: str) -> str:
        """Validate that the logging level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid logging level: {v}. Must be one of {valid_levels}"
            )
        return upper_v


class ModelSettings(BaseSettings):
    """Model runtime settings.

    Environment variables:
        DAILY_LINEAR_MODEL_DEVICE: torch device string used when no backend
            is passed to a model factory. Default: cpu
        DAILY_LINEAR_MODEL_SEED: Optional seed applied before parameter
            initialization.
    """

    device: str = Field(default="cpu")
    seed: Optional[int] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="DAILY_LINEAR_MODEL_")


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache
def get_model_settings() -> ModelSettings:
    """Get cached model settings."""
    return ModelSettings()


def clear_settings_cache() -> None:
    """Clear settings caches (used by tests)."""
    get_logging_settings.cache_clear()
    get_model_settings.cache_clear()
