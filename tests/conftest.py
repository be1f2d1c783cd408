"""Pytest configuration and fixtures."""

from datetime import date, datetime, time

import pytest

from models import Booking, BlockedWindow, VenueOperatingProfile, VenueSnapshot
from availability import InMemoryVenueDataSource

# Monday
DAY = date(2024, 1, 1)
# The evening before DAY, so no lead-time gating applies
EVE = datetime(2023, 12, 31, 18, 0)


@pytest.fixture
def make_venue():
    """Factory for a VenueSnapshot with sensible defaults."""

    def _make(
        opening=time(9, 0),
        closing=time(11, 0),
        interval=30,
        rooms=1,
        therapists=("t1",),
        bookings=(),
        windows=(),
        schedule=None,
        timezone=None,
    ) -> VenueSnapshot:
        return VenueSnapshot(
            profile=VenueOperatingProfile(
                venue_id="hotel_test",
                timezone=timezone,
                opening_time=opening,
                closing_time=closing,
                slot_interval_minutes=interval,
                room_capacity=rooms,
                therapist_ids=set(therapists),
            ),
            schedule=schedule,
            blocked_windows=list(windows),
            bookings=list(bookings),
        )

    return _make


@pytest.fixture
def booking():
    """Factory for an active booking on DAY."""

    def _make(start: str, duration: int = 30, therapist_id=None, **kwargs) -> Booking:
        return Booking(
            date=kwargs.pop("day", DAY),
            start_time=time.fromisoformat(start),
            duration_minutes=duration,
            therapist_id=therapist_id,
            **kwargs,
        )

    return _make


@pytest.fixture
def lunch_break() -> BlockedWindow:
    return BlockedWindow(label="Lunch break", start_time=time(13, 0), end_time=time(14, 0))


@pytest.fixture
def source() -> InMemoryVenueDataSource:
    """In-memory source with one open venue: 09:00-12:00, 2 rooms, 2 therapists."""
    src = InMemoryVenueDataSource()
    src.add_venue(VenueOperatingProfile(
        venue_id="hotel_a",
        opening_time=time(9, 0),
        closing_time=time(12, 0),
        slot_interval_minutes=30,
    ))
    src.add_room("hotel_a", "room_1")
    src.add_room("hotel_a", "room_2")
    src.add_room("hotel_a", "room_3", active=False)
    src.add_therapist("hotel_a", "t1")
    src.add_therapist("hotel_a", "t2")
    src.add_therapist("hotel_a", "t3", active=False)
    return src
