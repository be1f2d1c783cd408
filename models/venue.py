"""
Venue supply-side data models for the Venue Availability Engine.

This module defines what a venue can offer on a given day:
1. Operating hours and slot granularity
2. Resource pools (treatment rooms and therapists)
3. Blocked windows (administrative closures such as lunch breaks)
"""

from typing import List, Optional, Set
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from datetime import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .booking import Booking, require_whole_minute
from .schedule import DeploymentSchedule


class BlockedWindow(BaseModel):
    """A recurring time range during which no slot may be booked."""
    label: str = Field(default="", description="Admin-facing name, e.g. 'Lunch break'")
    start_time: time = Field(description="Block start (inclusive)")
    end_time: time = Field(description="Block end (exclusive)")
    days_of_week: Optional[List[int]] = Field(
        default=None,
        description="Weekdays the block applies to (0=Sunday). If None, applies every day"
    )
    is_active: bool = Field(default=True, description="Inactive windows are ignored")

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_whole_minutes(cls, v):
        return require_whole_minute(v)

    @field_validator('days_of_week')
    @classmethod
    def validate_days(cls, v):
        if v is None:
            return v
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Weekday {day} out of range (0=Sunday .. 6=Saturday)")
        return sorted(set(v))

    @model_validator(mode='after')
    def validate_times(self):
        # Same-day windows only, no overnight spans
        if self.start_time >= self.end_time:
            raise ValueError("Blocked window end time must be strictly after start time")
        return self

    def applies_on(self, weekday: int) -> bool:
        """True if the window is active on the given weekday (0=Sunday)."""
        if not self.is_active:
            return False
        return self.days_of_week is None or weekday in self.days_of_week


class VenueOperatingProfile(BaseModel):
    """
    Operating hours and resource pools of a venue.
    """
    venue_id: str = Field(min_length=1, description="Unique identifier")
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone of the venue, used to localise 'now'"
    )

    # Slot grid
    opening_time: time = Field(default=time(6, 0), description="First possible slot")
    closing_time: time = Field(default=time(23, 0), description="No slot starts at or after this")
    slot_interval_minutes: int = Field(default=30, ge=1, le=1440, description="Slot granularity")

    # Capacity pools
    room_capacity: int = Field(default=0, ge=0, description="Active treatment rooms")
    therapist_ids: Set[str] = Field(
        default_factory=set,
        description="Therapists currently active for this venue"
    )

    @field_validator('opening_time', 'closing_time')
    @classmethod
    def validate_whole_minutes(cls, v):
        return require_whole_minute(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone {v!r}") from None
        return v

    @model_validator(mode='after')
    def validate_hours(self):
        if self.closing_time <= self.opening_time:
            raise ValueError("Closing time must be strictly after opening time")
        return self

    @property
    def has_capacity(self) -> bool:
        return self.room_capacity > 0 and len(self.therapist_ids) > 0

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "venue_id": "hotel_lutetia",
            "timezone": "Europe/Paris",
            "opening_time": "09:00:00",
            "closing_time": "20:00:00",
            "slot_interval_minutes": 30,
            "room_capacity": 2,
            "therapist_ids": ["th_anna", "th_marc"]
        }
    })


class VenueSnapshot(BaseModel):
    """
    Everything the engine needs about one venue for one date,
    read in a single logical fetch.
    """
    profile: VenueOperatingProfile
    schedule: Optional[DeploymentSchedule] = Field(
        default=None,
        description="Deployment calendar. If None, the venue is always open"
    )
    blocked_windows: List[BlockedWindow] = Field(default_factory=list)
    bookings: List[Booking] = Field(
        default_factory=list,
        description="Non-terminal bookings on the evaluated date"
    )
