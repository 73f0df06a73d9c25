"""
Library configuration.

Centralized configuration management with environment variables.
Every setting can be overridden with an ``ANALYTIC_`` prefixed variable,
e.g. ``ANALYTIC_LOG_LEVEL=DEBUG``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="ANALYTIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "analytic-math"
    APP_VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Fuzzy comparison defaults used by compare()
    COMPARE_TOLERANCE: float = 0.001
    COMPARE_MODE: str = "relative"  # relative, absolute, sigfigs
    # In relative mode, values below ZERO_LEVEL are compared absolutely with ZERO_LEVEL_TOL
    ZERO_LEVEL: float = 1e-14
    ZERO_LEVEL_TOL: float = 1e-12

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'text', got {value!r}")
        return value

    @field_validator("COMPARE_TOLERANCE", "ZERO_LEVEL", "ZERO_LEVEL_TOL")
    @classmethod
    def _validate_tolerance(cls, value: float, info: ValidationInfo) -> float:
        if value < 0:
            raise ValueError(f"{info.field_name} must be non-negative, got {value}")
        return value

    @field_validator("COMPARE_MODE")
    @classmethod
    def _validate_mode(cls, value: str) -> str:
        value = value.lower()
        if value not in ("relative", "absolute", "sigfigs"):
            raise ValueError(f"Unknown COMPARE_MODE: {value!r}")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
