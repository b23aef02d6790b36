"""Interval arithmetic shared by every engine component."""

import math
from datetime import datetime
from typing import Dict, Iterable, List, Tuple, TypeVar

from .datetime_utils import as_date

Interval = Tuple[datetime, datetime]
T = TypeVar('T')


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open overlap test: touching intervals do not overlap."""
    return a_start < b_end and b_start < a_end


def overlaps_inclusive(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Boundary-aware overlap test used for conflict reporting.

    True when ``a`` starts inside ``[b_start, b_end)``, ends inside
    ``(b_start, b_end]``, or covers ``b`` entirely.
    """
    starts_inside = b_start <= a_start < b_end
    ends_inside = b_start < a_end <= b_end
    covers = a_start <= b_start and a_end >= b_end
    return starts_inside or ends_inside or covers


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Sort and coalesce overlapping or touching intervals."""
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def clip_interval(interval: Interval, window: Interval):
    """Intersect ``interval`` with ``window``; None when they are disjoint."""
    start = max(interval[0], window[0])
    end = min(interval[1], window[1])
    if start >= end:
        return None
    return start, end


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def group_by_day(items: Iterable[T], key=lambda item: item.start) -> Dict:
    """Bucket items by the calendar day of ``key(item)``."""
    buckets: Dict = {}
    for item in items:
        buckets.setdefault(as_date(key(item)), []).append(item)
    return buckets


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def events_on(events: Iterable, day) -> List:
    """Items whose start falls on ``day``."""
    target = as_date(day)
    return [e for e in events if e.start.date() == target]
