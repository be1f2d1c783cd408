"""
Demand-side data models: existing bookings and requested treatments.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import date as date_type, time as time_type, datetime, timedelta


def require_whole_minute(value: time_type) -> time_type:
    """Reject times that do not fall on a whole minute."""
    if value.second or value.microsecond:
        raise ValueError(f"Time {value.isoformat()} must fall on a whole minute")
    return value


class BookingStatus(str, Enum):
    """Normalised booking state. Raw store literals are mapped at the data-access boundary."""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(BaseModel):
    """
    An existing reservation that may occupy a room and a therapist.
    """
    id: Optional[str] = Field(default=None, description="Store identifier")
    date: date_type = Field(description="Calendar date")
    start_time: time_type = Field(description="Appointment start")
    duration_minutes: int = Field(default=30, gt=0, le=1440, description="Occupancy length")

    therapist_id: Optional[str] = Field(
        default=None,
        description="Assigned therapist. Unassigned bookings hold a room only"
    )
    status: BookingStatus = Field(default=BookingStatus.ACTIVE, description="Current state")

    @field_validator('start_time')
    @classmethod
    def validate_start_time(cls, v):
        return require_whole_minute(v)

    @property
    def counts_toward_capacity(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @property
    def start_minute(self) -> int:
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_minute(self) -> int:
        """Exclusive end, in minutes since midnight (may exceed 1440)."""
        return self.start_minute + self.duration_minutes

    @property
    def end_datetime(self) -> datetime:
        return datetime.combine(self.date, self.start_time) + timedelta(minutes=self.duration_minutes)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "bk_1042",
            "date": "2025-01-15",
            "start_time": "09:00:00",
            "duration_minutes": 60,
            "therapist_id": "th_anna",
            "status": "active"
        }
    })


class Treatment(BaseModel):
    """A bookable treatment from the venue's menu."""
    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Menu label")
    duration_minutes: int = Field(default=30, gt=0, le=480)
    lead_time_minutes: int = Field(
        default=0,
        ge=0,
        description="Minimum notice required before the appointment start"
    )
