"""
Slot grid generation and the same-day lead-time gate.
"""

import math
from datetime import date as date_type, datetime, time
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from models import Treatment

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def minutes_to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def generate_slots(opening_time: time, closing_time: time, interval_minutes: int) -> List[time]:
    """
    Every interval-aligned time of day t (counted from midnight) with
    opening_time <= t < closing_time. A non-aligned opening time starts
    the grid at the next boundary.

    Returns an empty list when closing_time <= opening_time.
    """
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")

    start_min = math.ceil(time_to_minutes(opening_time) / interval_minutes) * interval_minutes
    end_min = time_to_minutes(closing_time)

    slots = []
    t = start_min
    while t < end_min:
        slots.append(minutes_to_time(t))
        t += interval_minutes
    return slots


def max_lead_time(treatments: Iterable[Treatment]) -> int:
    """The slowest treatment governs the whole booking. 0 for an empty selection."""
    return max((t.lead_time_minutes for t in treatments), default=0)


def localize_now(now: datetime, timezone: Optional[str]) -> datetime:
    """
    Express 'now' as venue-local wall-clock time.
    Naive datetimes are assumed to already be venue-local.
    """
    if now.tzinfo is None or not timezone:
        return now.replace(tzinfo=None)
    return now.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def earliest_bookable_time(
    now: datetime,
    target_date: date_type,
    max_lead_minutes: int,
    interval_minutes: int
) -> Optional[time]:
    """
    Lead-time floor for slots on target_date. Slots strictly before it are not bookable.

    - Future date: None (no constraint).
    - Same day: now + lead, rounded UP to the next interval boundary.
    - Past date, or a floor that spills past midnight: time.max (nothing is bookable).
    """
    today = now.date()
    if target_date > today:
        return None
    if target_date < today:
        return time.max

    since_midnight = now - datetime.combine(today, time.min)
    ready_seconds = since_midnight.total_seconds() + max_lead_minutes * 60

    step_seconds = interval_minutes * 60
    floor_minutes = math.ceil(ready_seconds / step_seconds) * interval_minutes

    if floor_minutes >= MINUTES_PER_DAY:
        return time.max
    return minutes_to_time(floor_minutes)
