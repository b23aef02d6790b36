"""Availability and scheduling engine for calendar data."""

from .engine import (
    ConflictDetector,
    FindTimeEngine,
    FindTimeOptions,
    GoalSessionScheduler,
    ScheduleOptimizer,
    TimeBlockAnalyzer,
)
from .errors import InvalidGoalError, InvalidTaskError, OperationCancelled, ParseError, SchedulingError

__version__ = "0.1.0"

__all__ = [
    'ConflictDetector',
    'FindTimeEngine',
    'FindTimeOptions',
    'GoalSessionScheduler',
    'InvalidGoalError',
    'InvalidTaskError',
    'OperationCancelled',
    'ParseError',
    'ScheduleOptimizer',
    'SchedulingError',
    'TimeBlockAnalyzer',
]
