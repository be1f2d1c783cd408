"""
Deployment schedule data models for the Venue Availability Engine.

A venue is only bookable on days it is 'deployed'. This module defines the
three shapes a deployment calendar can take:
1. Always open (no calendar restriction)
2. Recurring weekly (every N weeks on selected weekdays)
3. One-time dates (an explicit list of days)
"""

from enum import Enum
from typing import Annotated, List, Optional, Union, Literal
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict, TypeAdapter
from datetime import date as date_type


class ScheduleType(str, Enum):
    """Deployment calendar variants (values match the store's enum)."""
    ALWAYS_OPEN = "always_open"
    RECURRING_WEEKLY = "specific_days"
    ONE_TIME_DATES = "one_time"


class AlwaysOpenSchedule(BaseModel):
    """The venue operates every day."""
    schedule_type: Literal["always_open"] = "always_open"


class RecurringWeeklySchedule(BaseModel):
    """
    The venue operates on selected weekdays, every N weeks from an anchor date.
    """
    schedule_type: Literal["specific_days"] = "specific_days"

    days_of_week: List[int] = Field(
        default_factory=list,
        description="Weekdays the venue operates (0=Sunday, 6=Saturday)"
    )
    recurrence_interval_weeks: int = Field(
        default=1,
        ge=1,
        description="Operate every N weeks, counted from recurring_start_date"
    )
    recurring_start_date: date_type = Field(description="Anchor date for interval counting")
    recurring_end_date: Optional[date_type] = Field(
        default=None,
        description="Inclusive end date. If None, the recurrence is unbounded"
    )

    @field_validator('days_of_week')
    @classmethod
    def validate_days(cls, v):
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Weekday {day} out of range (0=Sunday .. 6=Saturday)")
        return sorted(set(v))

    @model_validator(mode='after')
    def validate_dates(self):
        if self.recurring_end_date and self.recurring_end_date < self.recurring_start_date:
            raise ValueError("Recurring end date cannot be before start date")
        return self

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "schedule_type": "specific_days",
            "days_of_week": [1],
            "recurrence_interval_weeks": 2,
            "recurring_start_date": "2024-01-01",
            "recurring_end_date": None
        }
    })


class OneTimeDatesSchedule(BaseModel):
    """The venue operates only on an explicit list of dates."""
    schedule_type: Literal["one_time"] = "one_time"

    specific_dates: List[date_type] = Field(
        default_factory=list,
        description="Calendar dates the venue operates on"
    )

    @field_validator('specific_dates')
    @classmethod
    def dedupe_dates(cls, v):
        return sorted(set(v))


DeploymentSchedule = Annotated[
    Union[AlwaysOpenSchedule, RecurringWeeklySchedule, OneTimeDatesSchedule],
    Field(discriminator="schedule_type")
]

_schedule_adapter = TypeAdapter(DeploymentSchedule)


def parse_deployment_schedule(data: dict):
    """Build the right schedule variant from a dict keyed by 'schedule_type'."""
    return _schedule_adapter.validate_python(data)
