"""Blocked-window filter, capacity counter and the combined checker."""

from datetime import time

import pytest

from models import BlockedWindow, BookingStatus, VenueOperatingProfile
from availability import ConstraintChecker, count_occupancy, is_blocked, is_slot_open
from conftest import DAY

MONDAY = 1


def window(start: str, end: str, **kwargs) -> BlockedWindow:
    return BlockedWindow(start_time=time.fromisoformat(start), end_time=time.fromisoformat(end), **kwargs)


class TestBlockedWindows:

    def test_partial_overlap_blocks(self):
        assert is_blocked(time(10, 0), 30, MONDAY, [window("10:15", "10:45")])

    def test_full_containment_blocks(self):
        assert is_blocked(time(13, 0), 30, MONDAY, [window("13:00", "14:00")])

    @pytest.mark.parametrize("slot", [time(9, 45), time(10, 45)])
    def test_touching_edges_do_not_block(self, slot):
        assert not is_blocked(slot, 30, MONDAY, [window("10:15", "10:45")])

    def test_other_weekday_does_not_block(self):
        assert not is_blocked(time(13, 0), 30, MONDAY, [window("13:00", "14:00", days_of_week=[0, 6])])

    def test_matching_weekday_blocks(self):
        assert is_blocked(time(13, 0), 30, MONDAY, [window("13:00", "14:00", days_of_week=[MONDAY])])

    def test_inactive_window_is_ignored(self):
        assert not is_blocked(time(13, 0), 30, MONDAY, [window("13:00", "14:00", is_active=False)])

    def test_no_windows(self):
        assert not is_blocked(time(13, 0), 30, MONDAY, [])


class TestCapacity:

    def test_booking_occupies_its_whole_duration(self, booking):
        bookings = [booking("09:00", 60)]
        assert not is_slot_open(time(9, 0), 30, bookings, 1, {"t1"})
        assert not is_slot_open(time(9, 30), 30, bookings, 1, {"t1"})
        assert is_slot_open(time(10, 0), 30, bookings, 1, {"t1"})

    def test_occupancy_is_tested_at_the_slot_instant(self, booking):
        # A booking starting mid-slot does not close the slot
        bookings = [booking("10:15", 30, therapist_id="t1")]
        assert is_slot_open(time(10, 0), 30, bookings, 1, {"t1"})
        assert not is_slot_open(time(10, 30), 30, bookings, 1, {"t1"})

    def test_zero_rooms_closes_every_slot(self):
        assert not is_slot_open(time(10, 0), 30, [], 0, {"t1"})

    def test_no_therapists_closes_every_slot(self):
        assert not is_slot_open(time(10, 0), 30, [], 3, set())

    def test_room_pool_limits_concurrent_bookings(self, booking):
        bookings = [booking("10:00"), booking("10:00")]
        assert not is_slot_open(time(10, 0), 30, bookings, 2, {"t1", "t2", "t3"})
        assert is_slot_open(time(10, 0), 30, bookings, 3, {"t1", "t2", "t3"})

    def test_cancelled_and_completed_bookings_are_ignored(self, booking):
        bookings = [
            booking("10:00", status=BookingStatus.CANCELLED, therapist_id="t1"),
            booking("10:00", status=BookingStatus.COMPLETED, therapist_id="t1"),
        ]
        assert count_occupancy(time(10, 0), bookings) == (0, set())
        assert is_slot_open(time(10, 0), 30, bookings, 1, {"t1"})

    def test_unassigned_bookings_hold_a_room_only(self, booking):
        bookings = [booking("10:00"), booking("10:00")]
        assert count_occupancy(time(10, 0), bookings) == (2, set())
        assert is_slot_open(time(10, 0), 30, bookings, 3, {"t1"})

    def test_therapist_busy_closes_slot_despite_free_rooms(self, booking):
        bookings = [booking("10:00", therapist_id="t1"), booking("10:00", therapist_id="t1")]
        rooms_used, busy = count_occupancy(time(10, 0), bookings)
        assert (rooms_used, busy) == (2, {"t1"})
        # Three rooms leave space for one more booking, but the only therapist is taken
        assert not is_slot_open(time(10, 0), 30, bookings, 3, {"t1"})

    def test_room_capacity_two_single_therapist(self, booking):
        assert not is_slot_open(time(10, 0), 30, [booking("10:00", therapist_id="t1")], 2, {"t1"})
        assert is_slot_open(time(10, 0), 30, [booking("10:00", therapist_id="t1")], 2, {"t1", "t2"})

    def test_busy_therapist_outside_pool_does_not_consume_pool(self, booking):
        bookings = [booking("10:00", therapist_id="former_staff")]
        assert is_slot_open(time(10, 0), 30, bookings, 2, {"t1"})


class TestConstraintChecker:

    @pytest.fixture
    def profile(self):
        return VenueOperatingProfile(
            venue_id="v1",
            opening_time=time(9, 0),
            closing_time=time(18, 0),
            room_capacity=1,
            therapist_ids={"t1", "t2"},
        )

    def test_all_clear(self, profile):
        checker = ConstraintChecker(profile, DAY, MONDAY, [], [])
        assert checker.check_slot(time(10, 0)) is None

    def test_lead_time_violation(self, profile):
        checker = ConstraintChecker(profile, DAY, MONDAY, [], [], lead_time_floor=time(10, 30))
        violation = checker.check_slot(time(10, 0))
        assert violation.constraint_type == "LeadTime"
        assert "10:30" in violation.reason
        assert checker.check_slot(time(10, 30)) is None

    def test_blocked_violation_names_the_window(self, profile, lunch_break):
        checker = ConstraintChecker(profile, DAY, MONDAY, [lunch_break], [])
        violation = checker.check_slot(time(13, 30))
        assert violation.constraint_type == "Blocked"
        assert "Lunch break" in violation.reason

    def test_rooms_full_violation(self, profile, booking):
        checker = ConstraintChecker(profile, DAY, MONDAY, [], [booking("10:00")])
        assert checker.check_slot(time(10, 0)).constraint_type == "RoomsFull"

    def test_therapists_busy_violation(self, profile, booking):
        profile = profile.model_copy(update={"room_capacity": 5})
        bookings = [booking("10:00", therapist_id="t1"), booking("10:00", therapist_id="t2")]
        checker = ConstraintChecker(profile, DAY, MONDAY, [], bookings)
        assert checker.check_slot(time(10, 0)).constraint_type == "TherapistsBusy"

    def test_bookings_on_other_dates_are_ignored(self, profile, booking):
        other_day = booking("10:00", day=DAY.replace(day=2))
        checker = ConstraintChecker(profile, DAY, MONDAY, [], [other_day])
        assert checker.check_slot(time(10, 0)) is None
