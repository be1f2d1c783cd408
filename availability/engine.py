"""
The Venue Availability Engine.

This module implements the orchestration logic. For one venue and date it:
1. Rejects cheaply (no capacity, venue not deployed that day).
2. Lays out the slot grid for the venue's operating hours.
3. Runs every slot through the hard constraints (lead time, blocks, capacity).

The engine is pure: it reads its arguments, mutates nothing and performs no I/O.
It is advisory only. The booking write path must enforce capacity itself.
"""

import logging
from collections import defaultdict
from datetime import date as date_type, datetime, time as time_type
from typing import Dict, List, Optional, Sequence

from models import AvailableSlots, EmptyReason, Treatment, VenueSnapshot
from .calendar import is_venue_open, sunday_weekday
from .constraints import ConstraintChecker, ConstraintViolation
from .slots import earliest_bookable_time, generate_slots, localize_now, max_lead_time, time_to_minutes

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    """
    Availability orchestrator for a single venue snapshot.
    """

    def __init__(self, venue: VenueSnapshot):
        self.venue = venue
        self.profile = venue.profile

    def compute(
        self,
        day: date_type,
        treatments: Sequence[Treatment],
        now: datetime
    ) -> AvailableSlots:
        """
        Execute the availability pipeline.
        """
        venue_id = self.profile.venue_id

        # 1. Structural rejections
        if not self.profile.has_capacity:
            logger.info(f"Venue {venue_id}: no rooms or therapists, returning empty")
            return AvailableSlots(date=day, reason=EmptyReason.NO_CAPACITY)

        if not is_venue_open(self.venue.schedule, day):
            logger.info(f"Venue {venue_id} is not deployed on {day.isoformat()}")
            return AvailableSlots(date=day, reason=EmptyReason.VENUE_NOT_DEPLOYED)

        # 2. Candidate grid
        candidates = generate_slots(
            self.profile.opening_time,
            self.profile.closing_time,
            self.profile.slot_interval_minutes
        )

        # 3. Filter through hard constraints
        checker = self._build_checker(day, treatments, now)
        open_slots: List[time_type] = []
        rejections: Dict[str, int] = defaultdict(int)

        for slot in candidates:
            violation = checker.check_slot(slot)
            if violation is None:
                open_slots.append(slot)
            else:
                rejections[violation.constraint_type] += 1

        logger.debug(
            f"Venue {venue_id} on {day.isoformat()}: "
            f"{len(open_slots)}/{len(candidates)} slots open, rejections={dict(rejections)}"
        )
        return AvailableSlots(date=day, slots=open_slots, rejections=dict(rejections))

    def explain_slot(
        self,
        day: date_type,
        slot: time_type,
        treatments: Sequence[Treatment],
        now: datetime
    ) -> Optional[ConstraintViolation]:
        """
        Can a booking start at exactly this time? Returns None if so,
        otherwise the first constraint that rejects it.
        """
        if not self.profile.has_capacity:
            return ConstraintViolation(EmptyReason.NO_CAPACITY.value, "Venue has no rooms or therapists", day, slot)

        if not is_venue_open(self.venue.schedule, day):
            return ConstraintViolation(EmptyReason.VENUE_NOT_DEPLOYED.value, "Venue is not deployed on this date", day, slot)

        if not self.profile.opening_time <= slot < self.profile.closing_time:
            return ConstraintViolation("OutOfHours", "Outside operating hours", day, slot)

        if slot.second or slot.microsecond or time_to_minutes(slot) % self.profile.slot_interval_minutes:
            return ConstraintViolation(
                "OffGrid",
                f"Not aligned to the {self.profile.slot_interval_minutes}-minute slot grid",
                day, slot
            )

        return self._build_checker(day, treatments, now).check_slot(slot)

    def _build_checker(self, day: date_type, treatments: Sequence[Treatment], now: datetime) -> ConstraintChecker:
        local_now = localize_now(now, self.profile.timezone)
        floor = earliest_bookable_time(
            local_now,
            day,
            max_lead_time(treatments),
            self.profile.slot_interval_minutes
        )
        return ConstraintChecker(
            self.profile,
            day,
            sunday_weekday(day),
            self.venue.blocked_windows,
            self.venue.bookings,
            lead_time_floor=floor
        )


def compute_available_slots(
    venue: VenueSnapshot,
    day: date_type,
    treatments: Sequence[Treatment],
    now: datetime
) -> AvailableSlots:
    """Open slots for a venue on a date, for the given treatment selection."""
    return AvailabilityEngine(venue).compute(day, treatments, now)


def explain_slot(
    venue: VenueSnapshot,
    day: date_type,
    slot: time_type,
    treatments: Sequence[Treatment],
    now: datetime
) -> Optional[ConstraintViolation]:
    """Why (if at all) a specific start time cannot be booked."""
    return AvailabilityEngine(venue).explain_slot(day, slot, treatments, now)
