"""Utility functions."""

from .cancellation import CancellationToken
from .config import get_default_config, load_config
from .datetime_utils import days_in_range, is_working_day, time_of_day
from .intervals import clamp, merge_intervals, minutes_between, overlaps, overlaps_inclusive

__all__ = [
    'CancellationToken',
    'clamp',
    'days_in_range',
    'get_default_config',
    'is_working_day',
    'load_config',
    'merge_intervals',
    'minutes_between',
    'overlaps',
    'overlaps_inclusive',
    'time_of_day',
]
