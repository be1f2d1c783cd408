"""
Request/response boundary of the availability engine.

Validates the request, reads every collaborator for the venue in one pass,
hands the snapshot to the pure engine and shapes the response. Collaborator
failures abort the request; they are never read as 'no constraint'.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from pydantic import ValidationError

from models import AvailabilityRequest, AvailableSlots, Treatment, VenueOperatingProfile, VenueSnapshot
from .engine import AvailabilityEngine
from .errors import DataFetchError, InvalidRequestError
from .source import VenueDataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AvailabilityService:
    """
    Serves availability requests against a VenueDataSource.
    Stateless apart from the injected source and clock.
    """

    def __init__(self, source: VenueDataSource, clock: Optional[Callable[[], datetime]] = None):
        self.source = source
        self.clock = clock or (lambda: datetime.now().astimezone())

    def get_available_slots(self, request: Union[AvailabilityRequest, Dict[str, Any]]) -> AvailableSlots:
        request = self._validate(request)
        snapshot, treatments = self.load_snapshot(request)

        engine = AvailabilityEngine(snapshot)
        result = engine.compute(request.date, treatments, self.clock())
        logger.info(
            f"Availability for venue {request.venue_id} on {request.date.isoformat()}: "
            f"{len(result.slots)} slots" + (f" ({result.reason.value})" if result.reason else "")
        )
        return result

    def handle(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Wire-level entry point: request dict in, response dict out."""
        return self.get_available_slots(payload).to_response()

    def load_snapshot(self, request: AvailabilityRequest):
        """Read everything the engine needs for (venue, date) and validate it."""
        venue_id = request.venue_id

        profile = self._fetch_profile(venue_id)
        therapist_ids = self._fetch("therapists", venue_id, lambda: self.source.get_active_therapist_ids(venue_id))
        room_count = self._fetch("rooms", venue_id, lambda: self.source.get_active_room_count(venue_id))
        schedule = self._fetch("deployment schedule", venue_id, lambda: self.source.get_deployment_schedule(venue_id))
        windows = self._fetch("blocked windows", venue_id, lambda: self.source.get_active_blocked_windows(venue_id))
        bookings = self._fetch(
            "bookings", venue_id,
            lambda: self.source.get_non_terminal_bookings(venue_id, request.date)
        )
        lead_times = self._fetch(
            "treatment lead times", venue_id,
            lambda: self.source.get_treatment_lead_times(request.treatment_ids)
        )

        if len(lead_times) != len(request.treatment_ids):
            raise InvalidRequestError(
                f"Expected {len(request.treatment_ids)} treatments, found {len(lead_times)}"
            )

        try:
            snapshot = VenueSnapshot(
                profile=VenueOperatingProfile.model_validate({
                    **profile.model_dump(),
                    "therapist_ids": set(therapist_ids),
                    "room_capacity": room_count,
                }),
                schedule=schedule,
                blocked_windows=list(windows),
                bookings=list(bookings),
            )
            treatments: List[Treatment] = [
                Treatment(id=tid, lead_time_minutes=lead)
                for tid, lead in zip(request.treatment_ids, lead_times)
            ]
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid venue data for {venue_id}: {e}") from e

        return snapshot, treatments

    @staticmethod
    def _validate(request: Union[AvailabilityRequest, Dict[str, Any]]) -> AvailabilityRequest:
        if isinstance(request, AvailabilityRequest):
            return request
        try:
            return AvailabilityRequest.model_validate(request)
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid availability request: {e}") from e

    def _fetch_profile(self, venue_id: str) -> VenueOperatingProfile:
        # Only this read maps a missing key to an unknown venue
        def read():
            try:
                return self.source.get_venue_operating_profile(venue_id)
            except LookupError:
                return None

        profile = self._fetch("operating profile", venue_id, read)
        if profile is None:
            raise InvalidRequestError(f"Unknown venue {venue_id}")
        return profile

    @staticmethod
    def _fetch(resource: str, venue_id: str, read: Callable[[], T]) -> T:
        try:
            return read()
        except ValidationError as e:
            raise InvalidRequestError(f"Malformed {resource} record for venue {venue_id}: {e}") from e
        except Exception as e:
            logger.error(f"Failed to fetch {resource} for venue {venue_id}: {e}")
            raise DataFetchError(resource, venue_id) from e
