"""
Data models package for the Venue Availability Engine.

This package exports the three core pillars of the data architecture:
1. Calendar (DeploymentSchedule variants)
2. Supply (VenueOperatingProfile, BlockedWindow) and Demand (Booking, Treatment)
3. Output (AvailableSlots, EmptyReason)
"""

from .schedule import (
    ScheduleType,
    AlwaysOpenSchedule,
    RecurringWeeklySchedule,
    OneTimeDatesSchedule,
    DeploymentSchedule,
    parse_deployment_schedule
)

from .booking import (
    Booking,
    BookingStatus,
    Treatment
)

from .venue import (
    BlockedWindow,
    VenueOperatingProfile,
    VenueSnapshot
)

from .result import (
    AvailabilityRequest,
    AvailableSlots,
    EmptyReason
)

__all__ = [
    # --- Calendar Models ---
    "ScheduleType",
    "AlwaysOpenSchedule",
    "RecurringWeeklySchedule",
    "OneTimeDatesSchedule",
    "DeploymentSchedule",
    "parse_deployment_schedule",

    # --- Demand Models ---
    "Booking",
    "BookingStatus",
    "Treatment",

    # --- Supply Models ---
    "BlockedWindow",
    "VenueOperatingProfile",
    "VenueSnapshot",

    # --- Output Models ---
    "AvailabilityRequest",
    "AvailableSlots",
    "EmptyReason",
]
