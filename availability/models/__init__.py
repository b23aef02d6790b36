"""Value objects consumed and produced by the engine."""

from .blocks import AvailabilitySummary, FindTimeResult, TimeBlock, TimeBlockAnalysis, TimeSlot
from .conflict import ConflictAnalysis, EventConflict
from .event import Attendee, Event, WorkingWindow
from .goal import Goal, GoalProgress, GoalScheduleResult, GoalSession
from .schedule import (
    OptimizedSchedule,
    RebalanceRecommendation,
    RebalanceResult,
    ScheduleSuggestion,
    ScheduleSummary,
    SlotCandidate,
)
from .task import SchedulingPreferences, Task

__all__ = [
    'Attendee',
    'AvailabilitySummary',
    'ConflictAnalysis',
    'Event',
    'EventConflict',
    'FindTimeResult',
    'Goal',
    'GoalProgress',
    'GoalScheduleResult',
    'GoalSession',
    'OptimizedSchedule',
    'RebalanceRecommendation',
    'RebalanceResult',
    'ScheduleSuggestion',
    'ScheduleSummary',
    'SchedulingPreferences',
    'SlotCandidate',
    'Task',
    'TimeBlock',
    'TimeBlockAnalysis',
    'TimeSlot',
    'WorkingWindow',
]
