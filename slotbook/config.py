"""
Centralized configuration with environment variable overrides.

Booking horizon, slot granularity, evening policy thresholds and the
calendar display range are configurable here. Nothing is hardcoded in the
scheduling core or the booking service.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from slotbook.logging_context import REQUEST_LOG_FORMAT, install_request_filter

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BookingConfig:
    """Slot engine settings loaded from environment or defaults."""

    booking_window_days: int = _safe_int("BOOKING_WINDOW_DAYS", "21")
    slot_interval_minutes: int = _safe_int("TIME_SLOT_INTERVAL", "10")
    evening_start_hour: int = _safe_int("EVENING_START_HOUR", "19")
    long_session_minutes: int = _safe_int("LONG_SESSION_MINUTES", "60")
    fallback_open_start: str = os.getenv("FALLBACK_OPEN_START", "09:00")
    fallback_open_end: str = os.getenv("FALLBACK_OPEN_END", "22:00")
    preview_duration_minutes: int = _safe_int("PREVIEW_DURATION_MINUTES", "10")
    preview_rest_minutes: int = _safe_int("PREVIEW_REST_MINUTES", "5")
    max_transaction_retries: int = _safe_int("MAX_TRANSACTION_RETRIES", "3")

    @property
    def slots_per_hour(self) -> int:
        return 60 // self.slot_interval_minutes


@dataclass(frozen=True)
class CalendarConfig:
    """Hour range shown on the calendar grid."""

    start_hour: int = _safe_int("CALENDAR_START_HOUR", "8")
    end_hour: int = _safe_int("CALENDAR_END_HOUR", "22")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    booking: BookingConfig = field(default_factory=BookingConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    business_name: str = os.getenv("BUSINESS_NAME", "Stretch & Ease Studio")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_hhmm(name: str, value: str) -> None:
    parts = value.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"{name} must be HH:MM, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 24 and 0 <= minute < 60) or (hour == 24 and minute):
        raise ValueError(f"{name} must be HH:MM, got {value!r}")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    booking = config.booking
    if booking.booking_window_days < 1:
        raise ValueError(
            f"BOOKING_WINDOW_DAYS must be >= 1, got {booking.booking_window_days}"
        )
    if booking.slot_interval_minutes < 1 or 60 % booking.slot_interval_minutes:
        raise ValueError(
            "TIME_SLOT_INTERVAL must be a positive divisor of 60, "
            f"got {booking.slot_interval_minutes}"
        )
    if not 0 <= booking.evening_start_hour <= 23:
        raise ValueError(
            f"EVENING_START_HOUR must be between 0 and 23, got {booking.evening_start_hour}"
        )
    if booking.long_session_minutes < 1:
        raise ValueError(
            f"LONG_SESSION_MINUTES must be >= 1, got {booking.long_session_minutes}"
        )
    if booking.preview_duration_minutes < 1:
        raise ValueError(
            "PREVIEW_DURATION_MINUTES must be >= 1, "
            f"got {booking.preview_duration_minutes}"
        )
    if booking.preview_rest_minutes < 0:
        raise ValueError(
            f"PREVIEW_REST_MINUTES must be >= 0, got {booking.preview_rest_minutes}"
        )
    if booking.max_transaction_retries < 1:
        raise ValueError(
            "MAX_TRANSACTION_RETRIES must be >= 1, "
            f"got {booking.max_transaction_retries}"
        )
    _validate_hhmm("FALLBACK_OPEN_START", booking.fallback_open_start)
    _validate_hhmm("FALLBACK_OPEN_END", booking.fallback_open_end)

    calendar = config.calendar
    if not 0 <= calendar.start_hour < calendar.end_hour <= 24:
        raise ValueError(
            "CALENDAR_START_HOUR/CALENDAR_END_HOUR must satisfy "
            f"0 <= start < end <= 24, got {calendar.start_hour}-{calendar.end_hour}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=REQUEST_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_filter(logging.getLogger().handlers)
    logger.info("Configuration loaded for '%s'", config.business_name)
    return config


# Singleton instance
settings = load_config()
