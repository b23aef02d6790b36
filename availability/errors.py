"""Exception hierarchy for the scheduling engine."""

from typing import Optional


class SchedulingError(Exception):
    """Base class for all engine errors."""


class ParseError(SchedulingError):
    """Raised when an input record has a malformed or missing interval."""

    def __init__(self, record_id: Optional[str], reason: str):
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Invalid record {record_id!r}: {reason}")


class InvalidTaskError(SchedulingError):
    """Raised when a task cannot enter the scheduling queue."""

    def __init__(self, task_id: Optional[str], reason: str):
        self.task_id = task_id
        self.reason = reason
        super().__init__(f"Invalid task {task_id!r}: {reason}")


class InvalidGoalError(SchedulingError):
    """Raised when a goal definition cannot be scheduled."""

    def __init__(self, goal_id: Optional[str], reason: str):
        self.goal_id = goal_id
        self.reason = reason
        super().__init__(f"Invalid goal {goal_id!r}: {reason}")


class OperationCancelled(SchedulingError):
    """Raised when a call is cancelled or runs past its deadline."""
