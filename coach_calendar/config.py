"""
Centralized configuration with environment variable overrides.

Storage selection, the coach's display name, and logging are configurable
here. The day grid and call durations are fixed scheduling constants and
live with the scheduling code instead.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from coach_calendar.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "local")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class CalendarConfig:
    """Calendar presentation settings."""

    coach_name: str = os.getenv("COACH_NAME", "HealthTick Coach")
    upcoming_occurrences: int = _safe_int("UPCOMING_OCCURRENCES", "4")


@dataclass(frozen=True)
class StorageConfig:
    """Which booking store the application composes, and where it keeps data."""

    backend: str = os.getenv("STORAGE_BACKEND", "memory")
    data_file: str = os.getenv("CALENDAR_DATA_FILE", "healthtick-calendar.json")
    fallback_enabled: bool = _safe_bool("STORAGE_FALLBACK", "true")
    seed_default_clients: bool = _safe_bool("SEED_DEFAULT_CLIENTS", "true")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "coach-calendar")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.storage.backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {config.storage.backend!r}"
        )
    if config.storage.backend == "local" and not config.storage.data_file.strip():
        raise ValueError("CALENDAR_DATA_FILE must be set when STORAGE_BACKEND is 'local'")
    if config.calendar.upcoming_occurrences < 1:
        raise ValueError(
            f"UPCOMING_OCCURRENCES must be >= 1, got {config.calendar.upcoming_occurrences}"
        )
    if not config.calendar.coach_name.strip():
        raise ValueError("COACH_NAME must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(getattr(logging, config.log_level.upper(), logging.INFO))
    logger.info(
        "Configuration loaded for '%s' (storage: %s)",
        config.calendar.coach_name, config.storage.backend,
    )
    return config


# Singleton instance
settings = load_config()
