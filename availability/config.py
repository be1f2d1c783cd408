"""
Engine configuration.

Defaults here fill gaps in collaborator records (e.g. a venue with no
opening hours set). They are applied at the data-access boundary only;
the engine itself always receives complete models.
"""

import os
from dataclasses import dataclass
from datetime import time
from functools import lru_cache


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for the availability engine.

    Attributes:
        default_opening_time: Used when a venue has no opening time
        default_closing_time: Used when a venue has no closing time
        default_slot_interval_minutes: Used when a venue has no slot interval
        default_booking_duration_minutes: Used when a booking has no duration
        default_timezone: Used when a venue has no timezone
    """
    default_opening_time: time = time(6, 0)
    default_closing_time: time = time(23, 0)
    default_slot_interval_minutes: int = 30
    default_booking_duration_minutes: int = 30
    default_timezone: str = "Europe/Paris"

    def __post_init__(self):
        """Validate configuration."""
        if self.default_closing_time <= self.default_opening_time:
            raise ValueError("default_closing_time must be after default_opening_time")
        if not 0 < self.default_slot_interval_minutes <= 1440:
            raise ValueError(
                f"default_slot_interval_minutes must be in 1..1440, got {self.default_slot_interval_minutes}"
            )
        if self.default_booking_duration_minutes <= 0:
            raise ValueError("default_booking_duration_minutes must be positive")


def _env_time(name: str, fallback: time) -> time:
    raw = os.environ.get(name)
    if not raw:
        return fallback
    return time.fromisoformat(raw)


def _env_int(name: str, fallback: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return fallback
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: expected an integer, got {raw!r}") from None


def load_engine_config() -> EngineConfig:
    """Build an EngineConfig from SPA_* environment variables."""
    base = EngineConfig()
    return EngineConfig(
        default_opening_time=_env_time("SPA_DEFAULT_OPENING_TIME", base.default_opening_time),
        default_closing_time=_env_time("SPA_DEFAULT_CLOSING_TIME", base.default_closing_time),
        default_slot_interval_minutes=_env_int("SPA_DEFAULT_SLOT_INTERVAL", base.default_slot_interval_minutes),
        default_booking_duration_minutes=_env_int("SPA_DEFAULT_BOOKING_DURATION", base.default_booking_duration_minutes),
        default_timezone=os.environ.get("SPA_DEFAULT_TIMEZONE") or base.default_timezone,
    )


@lru_cache
def get_engine_config() -> EngineConfig:
    """Get engine configuration (singleton)."""
    return load_engine_config()
