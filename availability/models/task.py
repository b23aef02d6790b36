"""Task and scheduling preference data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import InvalidTaskError

PRIORITIES = ('high', 'medium', 'low')
TASK_TYPES = ('meeting', 'focus', 'break', 'routine')
PREFERRED_TIMES = ('morning', 'afternoon', 'evening')


@dataclass
class Task:
    """Represents a task waiting to be placed into free time."""

    task_id: str
    title: str
    duration: int  # minutes
    priority: str = 'medium'
    task_type: str = 'focus'
    deadline: Optional[datetime] = None
    preferred_time_of_day: Optional[str] = None

    def validate(self) -> None:
        """Raise ``InvalidTaskError`` unless the task can be scheduled."""
        if self.duration is None or self.duration <= 0:
            raise InvalidTaskError(self.task_id, f"duration must be positive, got {self.duration}")
        if self.priority not in PRIORITIES:
            raise InvalidTaskError(self.task_id, f"unknown priority {self.priority!r}")
        if self.task_type not in TASK_TYPES:
            raise InvalidTaskError(self.task_id, f"unknown type {self.task_type!r}")
        if self.preferred_time_of_day not in (None,) + PREFERRED_TIMES:
            raise InvalidTaskError(
                self.task_id, f"unknown preferred time {self.preferred_time_of_day!r}"
            )


@dataclass
class SchedulingPreferences:
    """User preferences that steer slot scoring."""

    workday_start: int = 8
    workday_end: int = 18
    preferred_focus_hours: List[int] = field(default_factory=lambda: [9, 10, 14, 15])
    avoid_meeting_hours: List[int] = field(default_factory=lambda: [12, 13])
    min_break_between_events: int = 15
    max_consecutive_meetings: int = 3
    prefer_morning_meetings: bool = True

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **overrides) -> 'SchedulingPreferences':
        """Build preferences from the optimizer config section."""
        values = dict(((config or {}).get('optimizer', {}) or {}).get('preferences', {}))
        values.update(overrides)
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in values.items() if k in known})
