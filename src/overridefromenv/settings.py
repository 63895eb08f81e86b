"""Settings for the ``overridefromenv`` command-line tool.

Read from ``OVERRIDEFROMENV_*`` environment variables and an optional
``.env`` file via pydantic-settings. The library functions never consult
these; they only shape the CLI's logging.

Examples:
    >>> from overridefromenv.settings import Settings
    >>> Settings(log_level="DEBUG").log_level
    'DEBUG'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "OVERRIDEFROMENV_"


class Settings(BaseSettings):
    """CLI settings.

    Fields
    ──────
    log_level  : DEBUG | INFO | WARNING | ERROR
    log_format : console | json
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level for structured log output",
    )
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
