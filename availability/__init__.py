"""
Venue availability engine.

Deployment calendar -> slot grid -> hard constraints -> open slots.
The engine itself is pure; AvailabilityService wires it to a data source.
"""

from .calendar import is_venue_open, sunday_weekday
from .config import EngineConfig, get_engine_config
from .constraints import ConstraintChecker, ConstraintViolation, is_blocked, is_slot_open, count_occupancy
from .engine import AvailabilityEngine, compute_available_slots, explain_slot
from .errors import AvailabilityError, DataFetchError, InvalidRequestError
from .service import AvailabilityService
from .slots import earliest_bookable_time, generate_slots, max_lead_time
from .source import InMemoryVenueDataSource, VenueDataSource, normalize_booking_status

__all__ = [
    "is_venue_open",
    "sunday_weekday",
    "EngineConfig",
    "get_engine_config",
    "ConstraintChecker",
    "ConstraintViolation",
    "is_blocked",
    "is_slot_open",
    "count_occupancy",
    "AvailabilityEngine",
    "compute_available_slots",
    "explain_slot",
    "AvailabilityError",
    "DataFetchError",
    "InvalidRequestError",
    "AvailabilityService",
    "earliest_bookable_time",
    "generate_slots",
    "max_lead_time",
    "InMemoryVenueDataSource",
    "VenueDataSource",
    "normalize_booking_status",
]
