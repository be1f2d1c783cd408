"""
Hard Constraint Validation Logic.

This module answers the binary question: "Can a booking start at slot S?"
It enforces administrative closures (blocked windows), minimum notice
(lead time) and the two finite resource pools (rooms and therapists).

The two overlap tests differ:
- A blocked window is a range the slot must not run INTO (range vs range).
- A booking is an occupancy the slot must not start DURING (point vs range).
"""

from dataclasses import dataclass
from datetime import date as date_type, time as time_type
from typing import Iterable, List, Optional, Set, Tuple

from models import BlockedWindow, Booking, VenueOperatingProfile
from .slots import time_to_minutes


@dataclass
class ConstraintViolation:
    """Detailed reason for rejection."""
    constraint_type: str  # e.g., "LeadTime", "Blocked", "RoomsFull", "TherapistsBusy"
    reason: str
    date: date_type
    start_time: time_type


# --- Blocked-Window Filter ---

def find_blocking_window(
    slot: time_type,
    slot_interval_minutes: int,
    weekday: int,
    windows: Iterable[BlockedWindow]
) -> Optional[BlockedWindow]:
    """First active window overlapping [slot, slot + interval) on this weekday."""
    slot_start = time_to_minutes(slot)
    slot_end = slot_start + slot_interval_minutes

    for window in windows:
        if not window.applies_on(weekday):
            continue
        block_start = time_to_minutes(window.start_time)
        block_end = time_to_minutes(window.end_time)
        # Partial overlap is enough to exclude the slot
        if slot_start < block_end and slot_end > block_start:
            return window
    return None


def is_blocked(
    slot: time_type,
    slot_interval_minutes: int,
    weekday: int,
    windows: Iterable[BlockedWindow]
) -> bool:
    return find_blocking_window(slot, slot_interval_minutes, weekday, windows) is not None


# --- Capacity Counter ---

def blocking_bookings(slot: time_type, bookings: Iterable[Booking]) -> List[Booking]:
    """Active bookings whose [start, start + duration) contains the slot instant."""
    point = time_to_minutes(slot)
    return [
        b for b in bookings
        if b.counts_toward_capacity and b.start_minute <= point < b.end_minute
    ]


def count_occupancy(slot: time_type, bookings: Iterable[Booking]) -> Tuple[int, Set[str]]:
    """(rooms in use, distinct busy therapist ids) at the slot instant."""
    overlapping = blocking_bookings(slot, bookings)
    busy_therapists = {b.therapist_id for b in overlapping if b.therapist_id is not None}
    return len(overlapping), busy_therapists


def is_slot_open(
    slot: time_type,
    slot_interval_minutes: int,
    bookings: Iterable[Booking],
    room_capacity: int,
    therapist_ids: Set[str]
) -> bool:
    """
    Both pools must have a free unit at the slot instant.
    slot_interval_minutes is unused: occupancy is tested at the start instant only.
    """
    rooms_used, busy_therapists = count_occupancy(slot, bookings)
    if rooms_used >= room_capacity:
        return False
    return len(set(therapist_ids) - busy_therapists) > 0


class ConstraintChecker:
    """
    Validates hard constraints for a single venue and date.
    """

    def __init__(
        self,
        profile: VenueOperatingProfile,
        day: date_type,
        weekday: int,
        blocked_windows: List[BlockedWindow],
        bookings: List[Booking],
        lead_time_floor: Optional[time_type] = None
    ):
        self.profile = profile
        self.day = day
        self.weekday = weekday
        self.lead_time_floor = lead_time_floor

        # Pre-filter once, slots are checked many times
        self.windows = [w for w in blocked_windows if w.applies_on(weekday)]
        self.bookings = [b for b in bookings if b.date == day and b.counts_toward_capacity]

    def check_slot(self, slot: time_type) -> Optional[ConstraintViolation]:
        """
        Master validation function. Returns None if Valid, Violation object if Invalid.
        """
        # 1. Lead time (cheapest)
        if self.lead_time_floor is not None and slot < self.lead_time_floor:
            return ConstraintViolation(
                "LeadTime",
                f"Starts before the earliest bookable time {self._fmt(self.lead_time_floor)}",
                self.day, slot
            )

        # 2. Administrative closures
        window = find_blocking_window(slot, self.profile.slot_interval_minutes, self.weekday, self.windows)
        if window:
            return ConstraintViolation(
                "Blocked",
                f"Overlaps blocked window '{window.label or 'unnamed'}' "
                f"({self._fmt(window.start_time)}-{self._fmt(window.end_time)})",
                self.day, slot
            )

        # 3. Resource pools
        rooms_used, busy_therapists = count_occupancy(slot, self.bookings)
        if rooms_used >= self.profile.room_capacity:
            return ConstraintViolation(
                "RoomsFull",
                f"{rooms_used}/{self.profile.room_capacity} rooms in use",
                self.day, slot
            )

        free_therapists = self.profile.therapist_ids - busy_therapists
        if not free_therapists:
            return ConstraintViolation(
                "TherapistsBusy",
                f"All {len(self.profile.therapist_ids)} therapists are committed",
                self.day, slot
            )

        return None # All clear!

    @staticmethod
    def _fmt(t: time_type) -> str:
        if t == time_type.max:
            return "end of day"
        return t.strftime("%H:%M")
