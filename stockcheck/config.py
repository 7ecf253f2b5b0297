"""
Configuration module
====================

Loads process-level settings from environment variables and a ``.env`` file.
Engine tunables (synonyms, weights, thresholds) live in
``stockcheck.extraction.config``; this module only carries what an operator
sets per deployment.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class Settings(BaseSettings):
    """
    Application settings, read from ``STOCKCHECK_*`` environment variables.

    Attributes:
        LOG_LEVEL: level of the ``stockcheck`` root logger
        PROFILE_PATH: optional YAML profile with engine overrides
        HEADER_SCAN_WIDTH: how many leading cells of a row are scored
        ANCHOR_WINDOW: rows searched above a data anchor for its header
    """
    LOG_LEVEL: str = "INFO"
    PROFILE_PATH: Optional[str] = None
    HEADER_SCAN_WIDTH: int = 20
    ANCHOR_WINDOW: int = 20

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown LOG_LEVEL {v!r}; expected one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator("HEADER_SCAN_WIDTH", "ANCHOR_WINDOW")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    class Config:
        env_prefix = "STOCKCHECK_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


_settings_instance = None


def get_settings() -> Settings:
    """Return the cached settings instance, creating it on first call."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance so the next ``get_settings()`` re-reads the environment."""
    global _settings_instance
    _settings_instance = None
