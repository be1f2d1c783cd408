"""
Deployment calendar evaluation.

Answers the cheapest question first: "Is the venue operating at all on date D?"
"""

from datetime import date as date_type

from models import (
    AlwaysOpenSchedule,
    DeploymentSchedule,
    OneTimeDatesSchedule,
    RecurringWeeklySchedule,
)


def sunday_weekday(day: date_type) -> int:
    """Weekday with 0=Sunday .. 6=Saturday (the store's convention)."""
    return day.isoweekday() % 7


def is_venue_open(schedule: "DeploymentSchedule | None", day: date_type) -> bool:
    """Decide whether a venue is deployed on the given date."""
    if schedule is None or isinstance(schedule, AlwaysOpenSchedule):
        return True

    if isinstance(schedule, OneTimeDatesSchedule):
        return day in schedule.specific_dates

    if isinstance(schedule, RecurringWeeklySchedule):
        return _matches_recurrence(schedule, day)

    raise TypeError(f"Unknown deployment schedule: {type(schedule).__name__}")


def _matches_recurrence(schedule: RecurringWeeklySchedule, day: date_type) -> bool:
    if sunday_weekday(day) not in schedule.days_of_week:
        return False
    if day < schedule.recurring_start_date:
        return False
    if schedule.recurring_end_date and day > schedule.recurring_end_date:
        return False

    # Weeks are counted from the anchor date, not from calendar week boundaries
    weeks_since_anchor = (day - schedule.recurring_start_date).days // 7
    return weeks_since_anchor % schedule.recurrence_interval_weeks == 0
