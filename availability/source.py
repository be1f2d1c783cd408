"""
Collaborator read interface and data-access boundary.

This module acts as the 'Memory' the engine reads from:
1. The VenueDataSource protocol (what the engine's caller depends on).
2. An in-memory implementation with per-venue indices.
3. Row adapters that turn raw store records into validated models,
   including the normalisation of free-text booking statuses.
"""

import logging
import unicodedata
from collections import defaultdict
from datetime import date as date_type, time
from typing import Any, Dict, List, Optional, Protocol, Set

from models import (
    BlockedWindow,
    Booking,
    BookingStatus,
    DeploymentSchedule,
    Treatment,
    VenueOperatingProfile,
    ScheduleType,
    parse_deployment_schedule,
)
from .config import EngineConfig, get_engine_config

logger = logging.getLogger(__name__)


class VenueDataSource(Protocol):
    """Narrow read interface owned by the persistence layer."""

    def get_deployment_schedule(self, venue_id: str) -> Optional[DeploymentSchedule]: ...

    def get_venue_operating_profile(self, venue_id: str) -> VenueOperatingProfile: ...

    def get_active_blocked_windows(self, venue_id: str) -> List[BlockedWindow]: ...

    def get_active_therapist_ids(self, venue_id: str) -> Set[str]: ...

    def get_active_room_count(self, venue_id: str) -> int: ...

    def get_non_terminal_bookings(self, venue_id: str, day: date_type) -> List[Booking]: ...

    def get_treatment_lead_times(self, treatment_ids: List[str]) -> List[int]: ...


# --- Status normalisation ---

# Store literals seen in the wild, accent-folded and lower-cased
_CANCELLED_STATUSES = {"cancelled", "canceled", "annule", "annulee"}
_COMPLETED_STATUSES = {"completed", "termine", "terminee", "done"}


def _fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_booking_status(raw: Optional[str]) -> BookingStatus:
    """
    Map a raw status literal ('Annulé', 'Terminé', 'confirmed', 'En cours', ...)
    to the closed BookingStatus enum. Anything not terminal counts as active.
    """
    if not raw:
        return BookingStatus.ACTIVE
    folded = _fold(raw)
    if folded in _CANCELLED_STATUSES:
        return BookingStatus.CANCELLED
    if folded in _COMPLETED_STATUSES:
        return BookingStatus.COMPLETED
    return BookingStatus.ACTIVE


# --- Row adapters ---

def _parse_time(value: Any, fallback: Optional[time] = None) -> Optional[time]:
    if value is None or value == "":
        return fallback
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def booking_from_row(row: Dict[str, Any], config: Optional[EngineConfig] = None) -> Booking:
    """Build a Booking from a store row (booking_date, booking_time, duration, ...)."""
    config = config or get_engine_config()
    duration = row.get("duration") or row.get("total_duration") or config.default_booking_duration_minutes
    return Booking(
        id=str(row["id"]) if row.get("id") is not None else None,
        date=row["booking_date"],
        start_time=_parse_time(row["booking_time"]),
        duration_minutes=duration,
        therapist_id=row.get("therapist_id") or row.get("hairdresser_id"),
        status=normalize_booking_status(row.get("status")),
    )


def schedule_from_row(row: Optional[Dict[str, Any]]) -> Optional[DeploymentSchedule]:
    """Build the schedule variant for a venue_deployment_schedules row. None stays None."""
    if row is None:
        return None
    data: Dict[str, Any] = {"schedule_type": row.get("schedule_type") or ScheduleType.ALWAYS_OPEN.value}
    if data["schedule_type"] == ScheduleType.RECURRING_WEEKLY:
        data.update(
            days_of_week=row.get("days_of_week") or [],
            recurrence_interval_weeks=row.get("recurrence_interval") or 1,
            recurring_start_date=row.get("recurring_start_date"),
            recurring_end_date=row.get("recurring_end_date"),
        )
    elif data["schedule_type"] == ScheduleType.ONE_TIME_DATES:
        data["specific_dates"] = row.get("specific_dates") or []
    return parse_deployment_schedule(data)


def blocked_window_from_row(row: Dict[str, Any]) -> BlockedWindow:
    return BlockedWindow(
        label=row.get("label") or "",
        start_time=_parse_time(row["start_time"]),
        end_time=_parse_time(row["end_time"]),
        days_of_week=row.get("days_of_week"),
        is_active=row.get("is_active", True),
    )


def profile_from_row(row: Dict[str, Any], config: Optional[EngineConfig] = None) -> VenueOperatingProfile:
    """Build an operating profile from a venue row, filling unset hours from config."""
    config = config or get_engine_config()
    return VenueOperatingProfile(
        venue_id=str(row["id"]),
        timezone=row.get("timezone") or config.default_timezone,
        opening_time=_parse_time(row.get("opening_time"), config.default_opening_time),
        closing_time=_parse_time(row.get("closing_time"), config.default_closing_time),
        slot_interval_minutes=row.get("slot_interval") or config.default_slot_interval_minutes,
    )


class InMemoryVenueDataSource:
    """
    Dictionary-backed VenueDataSource.
    Keeps per-venue indices so each read is a direct lookup.
    """

    def __init__(self):
        self.profiles: Dict[str, VenueOperatingProfile] = {}
        self.schedules: Dict[str, DeploymentSchedule] = {}
        self.blocked_windows: Dict[str, List[BlockedWindow]] = defaultdict(list)
        self.therapists: Dict[str, Dict[str, bool]] = defaultdict(dict)
        self.rooms: Dict[str, Dict[str, bool]] = defaultdict(dict)
        self.bookings: Dict[str, List[Booking]] = defaultdict(list)
        self.treatments: Dict[str, Treatment] = {}

    # --- Write helpers (fixtures / demo loading) ---

    def add_venue(self, profile: VenueOperatingProfile, schedule: Optional[DeploymentSchedule] = None) -> None:
        self.profiles[profile.venue_id] = profile
        if schedule is not None:
            self.schedules[profile.venue_id] = schedule

    def add_blocked_window(self, venue_id: str, window: BlockedWindow) -> None:
        self.blocked_windows[venue_id].append(window)

    def add_therapist(self, venue_id: str, therapist_id: str, active: bool = True) -> None:
        self.therapists[venue_id][therapist_id] = active

    def add_room(self, venue_id: str, room_id: str, active: bool = True) -> None:
        self.rooms[venue_id][room_id] = active

    def add_booking(self, venue_id: str, booking: Booking) -> None:
        self.bookings[venue_id].append(booking)

    def add_treatment(self, treatment: Treatment) -> None:
        self.treatments[treatment.id] = treatment

    # --- VenueDataSource ---

    def get_deployment_schedule(self, venue_id: str) -> Optional[DeploymentSchedule]:
        return self.schedules.get(venue_id)

    def get_venue_operating_profile(self, venue_id: str) -> VenueOperatingProfile:
        try:
            return self.profiles[venue_id]
        except KeyError:
            raise LookupError(f"Unknown venue {venue_id}") from None

    def get_active_blocked_windows(self, venue_id: str) -> List[BlockedWindow]:
        return [w for w in self.blocked_windows.get(venue_id, []) if w.is_active]

    def get_active_therapist_ids(self, venue_id: str) -> Set[str]:
        return {tid for tid, active in self.therapists.get(venue_id, {}).items() if active}

    def get_active_room_count(self, venue_id: str) -> int:
        return sum(1 for active in self.rooms.get(venue_id, {}).values() if active)

    def get_non_terminal_bookings(self, venue_id: str, day: date_type) -> List[Booking]:
        return [
            b for b in self.bookings.get(venue_id, [])
            if b.date == day and b.counts_toward_capacity
        ]

    def get_treatment_lead_times(self, treatment_ids: List[str]) -> List[int]:
        missing = [tid for tid in treatment_ids if tid not in self.treatments]
        if missing:
            logger.warning(f"Unknown treatment ids requested: {missing}")
        return [self.treatments[tid].lead_time_minutes for tid in treatment_ids if tid in self.treatments]

    @classmethod
    def from_rows(cls, rows: Dict[str, List[Dict[str, Any]]], config: Optional[EngineConfig] = None) -> "InMemoryVenueDataSource":
        """
        Re-hydrate a source from raw store rows, keyed by table:
        venues, schedules, blocked_windows, therapists, rooms, bookings, treatments.
        """
        config = config or get_engine_config()
        source = cls()

        for row in rows.get("venues", []):
            source.add_venue(profile_from_row(row, config))
        for row in rows.get("schedules", []):
            schedule = schedule_from_row(row)
            if schedule is not None:
                source.schedules[str(row["hotel_id"])] = schedule
        for row in rows.get("blocked_windows", []):
            source.add_blocked_window(str(row["hotel_id"]), blocked_window_from_row(row))
        for row in rows.get("therapists", []):
            source.add_therapist(str(row["hotel_id"]), str(row["therapist_id"]), _is_active(row.get("status")))
        for row in rows.get("rooms", []):
            source.add_room(str(row["hotel_id"]), str(row["id"]), _is_active(row.get("status")))
        for row in rows.get("bookings", []):
            source.add_booking(str(row["hotel_id"]), booking_from_row(row, config))
        for row in rows.get("treatments", []):
            source.add_treatment(Treatment(
                id=str(row["id"]),
                name=row.get("name") or "",
                duration_minutes=row.get("duration") or config.default_booking_duration_minutes,
                lead_time_minutes=row.get("lead_time") or 0,
            ))

        logger.info(
            f"Loaded {len(source.profiles)} venues, "
            f"{sum(len(v) for v in source.bookings.values())} bookings, "
            f"{len(source.treatments)} treatments"
        )
        return source


def _is_active(status: Optional[str]) -> bool:
    return status is None or _fold(status) in ("active", "actif")
