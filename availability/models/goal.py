"""Recurring goal, session and progress data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..errors import InvalidGoalError
from ..utils.datetime_utils import parse_hhmm

FREQUENCIES = ('daily', 'weekly', 'monthly')
SESSION_STATUSES = ('scheduled', 'completed', 'skipped', 'rescheduled')

# Default session length in minutes per goal category.
CATEGORY_DEFAULT_DURATION = {
    'exercise': 30,
    'learning': 45,
    'family': 60,
    'meditation': 15,
    'reading': 30,
    'social': 60,
    'creative': 60,
    'health': 30,
    'career': 45,
    'custom': 30,
}


@dataclass
class Goal:
    """A recurring goal plus its running progress counters."""

    goal_id: str
    title: str
    frequency: str = 'weekly'
    target_count: int = 1
    duration_minutes: Optional[int] = None
    preferred_days: List[int] = field(default_factory=lambda: [1, 2, 3, 4, 5])  # Sunday=0
    preferred_time_start: str = '09:00'
    preferred_time_end: str = '17:00'
    allow_weekends: bool = False
    allow_mornings: bool = False  # before 09:00
    allow_evenings: bool = False  # from 18:00
    buffer_minutes: int = 15
    category: str = 'custom'
    is_paused: bool = False
    paused_until: Optional[datetime] = None

    current_streak: int = 0
    longest_streak: int = 0
    total_completed: int = 0
    last_completed_at: Optional[datetime] = None

    def __post_init__(self):
        """Fall back to the category's default session length."""
        if self.duration_minutes is None:
            self.duration_minutes = CATEGORY_DEFAULT_DURATION.get(self.category, 30)

    def validate(self) -> None:
        """Raise ``InvalidGoalError`` unless the goal can be scheduled."""
        if self.frequency not in FREQUENCIES:
            raise InvalidGoalError(self.goal_id, f"unknown frequency {self.frequency!r}")
        if self.target_count <= 0:
            raise InvalidGoalError(self.goal_id, f"target_count must be positive, got {self.target_count}")
        if self.duration_minutes <= 0:
            raise InvalidGoalError(
                self.goal_id, f"duration_minutes must be positive, got {self.duration_minutes}"
            )
        try:
            window = (parse_hhmm(self.preferred_time_start), parse_hhmm(self.preferred_time_end))
        except ValueError as exc:
            raise InvalidGoalError(self.goal_id, str(exc))
        if window[0] >= window[1]:
            raise InvalidGoalError(
                self.goal_id,
                f"preferred window {self.preferred_time_start}-{self.preferred_time_end} is empty",
            )


@dataclass
class GoalSession:
    """One scheduled occurrence of a goal."""

    goal_id: str
    scheduled_for: datetime
    duration_minutes: int
    status: str = 'scheduled'
    session_id: Optional[str] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass
class GoalProgress:
    """Completion figures for the goal's current period."""

    goal_id: str
    period_start: datetime
    period_end: datetime
    completed: int
    target: int
    percent_complete: float
    expected_progress: float
    on_track: bool


@dataclass
class GoalScheduleResult:
    """Sessions selected for a goal over the scheduling horizon."""

    goal_id: str
    sessions: List[GoalSession]
    available_slot_count: int
    sessions_needed: int

    @property
    def scheduled_count(self) -> int:
        return len(self.sessions)
