"""
Runtime configuration.

The game rules themselves are NOT configurable: the constants that define them live next to the code that uses them
(see src/core/shared_types.py and src/dotgame/scoring.py). Only operational settings belong here.
Every setting can be overridden with an environment variable prefixed by DOTGAME_ (or a line in .env).
"""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DOTGAME_", env_file=".env", extra="ignore"
    )

    # Logging
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, value: object) -> str:
        """Level names are case insensitive. Unknown names fall back to the default instead of failing at startup."""
        name = str(value).strip().upper()
        if name not in logging.getLevelNamesMapping():
            return DEFAULT_LOG_LEVEL
        return name

    @property
    def log_level(self) -> int:
        return logging.getLevelNamesMapping()[self.LOG_LEVEL]


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Set up the root logger for an application embedding the engine.
    The level is applied even if handlers were installed before (tests rely on pytest's caplog for those).
    """
    settings = settings or Settings()
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)
