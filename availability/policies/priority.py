"""Priority-then-deadline ordering with heuristic slot scoring."""

from datetime import datetime
from typing import List, Tuple

from ..models.blocks import TimeBlock
from ..models.task import SchedulingPreferences, Task
from ..utils.datetime_utils import whole_days_between
from ..utils.intervals import clamp
from .base import SchedulingPolicy

PRIORITY_RANK = {'high': 0, 'medium': 1, 'low': 2}
BASE_SCORE = 50


class PriorityPolicy(SchedulingPolicy):
    """Priority policy: priority first, then deadline."""

    def order_tasks(self, tasks: List[Task]) -> List[Task]:
        """Order tasks by priority, then earliest deadline; undated tasks last."""

        def sort_key(task: Task):
            # Primary: priority (high first)
            priority_key = PRIORITY_RANK[task.priority]

            # Secondary: tasks with a deadline before tasks without one
            has_deadline_key = 0 if task.deadline is not None else 1

            # Tertiary: deadline (earlier first)
            deadline_key = task.deadline if task.deadline is not None else datetime.min

            return (priority_key, has_deadline_key, deadline_key)

        # sorted() is stable, so equal keys keep input order
        return sorted(tasks, key=sort_key)

    def score_slot(
        self,
        task: Task,
        block: TimeBlock,
        preferences: SchedulingPreferences,
    ) -> Tuple[float, List[str]]:
        """Score a block for a task on a 0-100 scale."""
        score = BASE_SCORE
        reasoning: List[str] = []
        hour = block.start.hour
        period = block.time_of_day

        if task.priority == 'high':
            if block.quality == 'high':
                score += 20
                reasoning.append('High-quality time block for high-priority task')
            if hour in preferences.preferred_focus_hours:
                score += 15
                reasoning.append('Scheduled during preferred focus hours')

        if task.task_type == 'focus':
            if block.duration >= task.duration + 30:
                score += 10
                reasoning.append('Extra buffer time for deep work')
            if period in ('morning', 'afternoon'):
                score += 10
                reasoning.append('Optimal time for focused work')

        if task.task_type == 'meeting':
            if preferences.prefer_morning_meetings and period == 'morning':
                score += 10
                reasoning.append('Morning slot for meeting')
            if hour not in preferences.avoid_meeting_hours:
                score += 5
                reasoning.append('Not during avoid-meeting hours')

        if task.preferred_time_of_day and task.preferred_time_of_day == period:
            score += 15
            reasoning.append(f'Matches preferred time: {task.preferred_time_of_day}')

        slack = block.duration - task.duration
        if 0 <= slack <= 30:
            score += 10
            reasoning.append('Perfect duration fit')
        elif 30 < slack <= 60:
            score += 5
            reasoning.append('Good duration fit with buffer')

        if task.deadline is not None:
            days_left = whole_days_between(block.start, task.deadline)
            if days_left <= 1:
                score += 20
                reasoning.append('Urgent - deadline approaching')
            elif days_left <= 3:
                score += 10
                reasoning.append('High urgency - deadline soon')

        if task.task_type == 'focus' and period in ('evening', 'night'):
            score -= 15
            reasoning.append('Suboptimal time for focus work')

        return clamp(score, 0, 100), reasoning

    def get_policy_name(self) -> str:
        """Return policy name."""
        return "PRIORITY"
