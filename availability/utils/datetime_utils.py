"""Date and time utilities."""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple, Union

DateLike = Union[date, datetime]

MORNING_START = 6
AFTERNOON_START = 12
EVENING_START = 17
NIGHT_START = 21


def as_date(value: DateLike) -> date:
    """Return the calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: DateLike) -> datetime:
    """Midnight at the start of the given day."""
    return datetime.combine(as_date(value), time.min)


def at_time(day: DateLike, hour: int, minute: int = 0) -> datetime:
    """Instant on ``day`` at ``hour:minute``.

    Hours past 23 roll over into the following day, so ``at_time(d, 24)``
    is midnight at the end of ``d``.
    """
    return start_of_day(day) + timedelta(hours=hour, minutes=minute)


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Parse an ``HH:mm`` string into an (hour, minute) pair."""
    try:
        hour_text, minute_text = value.split(':')
        hour, minute = int(hour_text), int(minute_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Expected HH:mm time, got {value!r}")

    if not (0 <= hour <= 24 and 0 <= minute < 60) or (hour == 24 and minute):
        raise ValueError(f"Time out of range: {value!r}")
    return hour, minute


def time_of_day(instant: datetime) -> str:
    """Bucket an instant into morning, afternoon, evening or night."""
    hour = instant.hour
    if MORNING_START <= hour < AFTERNOON_START:
        return 'morning'
    if AFTERNOON_START <= hour < EVENING_START:
        return 'afternoon'
    if EVENING_START <= hour < NIGHT_START:
        return 'evening'
    return 'night'


def day_of_week(day: DateLike) -> int:
    """Weekday index with Sunday=0 through Saturday=6, as calendar records store it."""
    return (as_date(day).weekday() + 1) % 7


def is_weekend(day: DateLike) -> bool:
    """Saturday or Sunday."""
    return as_date(day).weekday() >= 5


def is_working_day(day: DateLike, working_days: Iterable[int]) -> bool:
    """Check if a date is a working day (``working_days`` indexed Sunday=0)."""
    return day_of_week(day) in working_days


def days_in_range(
    start_date: DateLike,
    end_date: DateLike,
    working_days: Optional[List[int]] = None,
) -> List[date]:
    """Get list of days between start and end dates, both inclusive."""
    days = []
    current = as_date(start_date)
    end = as_date(end_date)

    while current <= end:
        if working_days is None or is_working_day(current, working_days):
            days.append(current)
        current += timedelta(days=1)

    return days


def whole_days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, truncated toward zero."""
    return int((end - start).total_seconds() / 86400)
