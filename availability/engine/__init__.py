"""Scheduling engine components."""

from .conflicts import ConflictDetector
from .find_time import FindTimeEngine, FindTimeOptions, availability_summary
from .goals import GoalSessionScheduler, sessions_needed
from .optimizer import ScheduleOptimizer
from .time_blocks import TimeBlockAnalyzer, free_time_stats

__all__ = [
    'ConflictDetector',
    'FindTimeEngine',
    'FindTimeOptions',
    'GoalSessionScheduler',
    'ScheduleOptimizer',
    'TimeBlockAnalyzer',
    'availability_summary',
    'free_time_stats',
    'sessions_needed',
]
