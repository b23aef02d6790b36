"""Base slot scoring policy interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.blocks import TimeBlock
from ..models.task import SchedulingPreferences, Task


class SchedulingPolicy(ABC):
    """Abstract base class for task ordering and slot scoring policies."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize policy with configuration."""
        self.config = config or {}

    @abstractmethod
    def order_tasks(self, tasks: List[Task]) -> List[Task]:
        """Order tasks according to policy logic."""
        pass

    @abstractmethod
    def score_slot(
        self,
        task: Task,
        block: TimeBlock,
        preferences: SchedulingPreferences,
    ) -> Tuple[float, List[str]]:
        """Score a free block for a task and explain the score."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Return the name of this policy."""
        pass
