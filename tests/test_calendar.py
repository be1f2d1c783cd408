"""Deployment calendar evaluation."""

from datetime import date, timedelta

import pytest

from models import AlwaysOpenSchedule, OneTimeDatesSchedule, RecurringWeeklySchedule
from availability import is_venue_open, sunday_weekday


def test_sunday_weekday_convention():
    assert sunday_weekday(date(2024, 1, 7)) == 0  # Sunday
    assert sunday_weekday(date(2024, 1, 1)) == 1  # Monday
    assert sunday_weekday(date(2024, 1, 6)) == 6  # Saturday


def test_missing_schedule_means_always_open():
    assert is_venue_open(None, date(2024, 1, 1))


def test_always_open():
    assert is_venue_open(AlwaysOpenSchedule(), date(1999, 12, 31))


def test_one_time_dates():
    schedule = OneTimeDatesSchedule(specific_dates=[date(2024, 3, 1), date(2024, 3, 15)])
    assert is_venue_open(schedule, date(2024, 3, 1))
    assert is_venue_open(schedule, date(2024, 3, 15))
    assert not is_venue_open(schedule, date(2024, 3, 2))


class TestRecurringWeekly:
    """Every-N-weeks recurrence anchored on recurring_start_date."""

    @pytest.fixture
    def biweekly_mondays(self):
        return RecurringWeeklySchedule(
            days_of_week=[1],
            recurrence_interval_weeks=2,
            recurring_start_date=date(2024, 1, 1),
        )

    @pytest.mark.parametrize("day", [date(2024, 1, 1), date(2024, 1, 15), date(2024, 1, 29)])
    def test_open_on_cycle_weeks(self, biweekly_mondays, day):
        assert is_venue_open(biweekly_mondays, day)

    @pytest.mark.parametrize("day", [date(2024, 1, 8), date(2024, 1, 22)])
    def test_closed_on_off_weeks(self, biweekly_mondays, day):
        assert not is_venue_open(biweekly_mondays, day)

    def test_closed_on_other_weekdays(self, biweekly_mondays):
        assert not is_venue_open(biweekly_mondays, date(2024, 1, 2))

    def test_closed_before_anchor(self, biweekly_mondays):
        assert not is_venue_open(biweekly_mondays, date(2023, 12, 18))

    def test_end_date_is_inclusive(self):
        schedule = RecurringWeeklySchedule(
            days_of_week=[1],
            recurring_start_date=date(2024, 1, 1),
            recurring_end_date=date(2024, 1, 15),
        )
        assert is_venue_open(schedule, date(2024, 1, 15))
        assert not is_venue_open(schedule, date(2024, 1, 22))

    def test_empty_days_match_nothing(self):
        schedule = RecurringWeeklySchedule(days_of_week=[], recurring_start_date=date(2024, 1, 1))
        start = date(2024, 1, 1)
        assert not any(is_venue_open(schedule, start + timedelta(days=i)) for i in range(28))

    def test_weeks_counted_from_anchor_not_calendar(self):
        # Anchor on a Wednesday; Thursday and Monday of the anchor's 7-day block are week 0
        schedule = RecurringWeeklySchedule(
            days_of_week=[1, 4],
            recurrence_interval_weeks=2,
            recurring_start_date=date(2024, 1, 3),
        )
        assert is_venue_open(schedule, date(2024, 1, 4))   # Thu, day 1
        assert is_venue_open(schedule, date(2024, 1, 8))   # Mon, day 5
        assert not is_venue_open(schedule, date(2024, 1, 11))  # Thu, day 8
        assert not is_venue_open(schedule, date(2024, 1, 15))  # Mon, day 12
        assert is_venue_open(schedule, date(2024, 1, 18))  # Thu, day 15
