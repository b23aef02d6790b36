"""Greedy task placement into free time."""

from datetime import date, timedelta
from typing import List, Optional

from ..models.event import Event
from ..models.schedule import (
    OptimizedSchedule,
    RebalanceRecommendation,
    RebalanceResult,
    ScheduleSuggestion,
    ScheduleSummary,
    SlotCandidate,
)
from ..models.task import SchedulingPreferences, Task
from ..policies.base import SchedulingPolicy
from ..policies.priority import PriorityPolicy
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.config import get_section
from ..utils.datetime_utils import DateLike, as_date
from ..utils.intervals import round_half_up
from ..utils.logging_config import get_logger
from .time_blocks import TimeBlockAnalyzer

logger = get_logger(__name__)

FOCUS_PROTECTED_SCORE = 60


class ScheduleOptimizer:
    """Places prioritized tasks into free blocks, one task at a time.

    Each placement is added to the working event list before the next task
    is scored, so later tasks see earlier placements as busy time.
    """

    def __init__(self, policy: Optional[SchedulingPolicy] = None, config: Optional[dict] = None):
        """Initialize optimizer with policy and configuration."""
        self.config = config or {}
        self.policy = policy or PriorityPolicy(self.config)
        self.optimizer_config = get_section(config, 'optimizer')
        self.days_to_search = self.optimizer_config['days_to_search']
        self.max_alternatives = self.optimizer_config['max_alternatives']
        self.rebalance_threshold = self.optimizer_config['rebalance_threshold']
        self.analyzer = TimeBlockAnalyzer(config)

    def default_preferences(self) -> SchedulingPreferences:
        return SchedulingPreferences.from_config({'optimizer': self.optimizer_config})

    def find_best_slot(
        self,
        task: Task,
        events: List[Event],
        preferences: SchedulingPreferences,
        start_date: date,
        token: Optional[CancellationToken] = None,
    ) -> Optional[ScheduleSuggestion]:
        """Highest-scoring fitting block over the search window, or None."""
        candidates: List[SlotCandidate] = []
        duration = timedelta(minutes=task.duration)

        for offset in range(self.days_to_search):
            check_cancelled(token, "optimize")
            day = start_date + timedelta(days=offset)
            analysis = self.analyzer.analyze(
                day,
                events,
                workday_start_hour=preferences.workday_start,
                workday_end_hour=preferences.workday_end,
            )

            for block in analysis.free_blocks:
                if block.duration < task.duration:
                    continue
                score, reasoning = self.policy.score_slot(task, block, preferences)
                candidates.append(SlotCandidate(
                    start=block.start,
                    end=block.start + duration,
                    date=analysis.date,
                    score=score,
                    reasoning=reasoning,
                ))

        if not candidates:
            return None

        # Stable sort: equal scores keep day-then-block order.
        ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
        return ScheduleSuggestion(
            task=task,
            suggested_slot=ranked[0],
            alternative_slots=[
                SlotCandidate(c.start, c.end, c.date, c.score)
                for c in ranked[1:1 + self.max_alternatives]
            ],
        )

    def optimize(
        self,
        tasks: List[Task],
        existing_events: List[Event],
        preferences: Optional[SchedulingPreferences] = None,
        start_date: Optional[DateLike] = None,
        token: Optional[CancellationToken] = None,
    ) -> OptimizedSchedule:
        """Generate suggestions for tasks."""
        for task in tasks:
            task.validate()

        prefs = preferences or self.default_preferences()
        first_day = as_date(start_date) if start_date is not None else date.today()
        working_events = list(existing_events)
        suggestions: List[ScheduleSuggestion] = []
        conflicts: List[str] = []

        # Order matters: each task sees the placements made before it.
        for task in self.policy.order_tasks(tasks):
            suggestion = self.find_best_slot(task, working_events, prefs, first_day, token)

            if suggestion is None:
                reason = f"{task.title} ({task.duration} min) - No suitable time slot found"
                conflicts.append(reason)
                logger.info("task_unscheduled", task_id=task.task_id, duration=task.duration)
                continue

            suggestions.append(suggestion)
            slot = suggestion.suggested_slot
            working_events.append(Event(
                event_id=task.task_id,
                title=task.title,
                start=slot.start,
                end=slot.end,
            ))
            logger.debug(
                "task_scheduled",
                task_id=task.task_id,
                start=slot.start.isoformat(),
                score=slot.score,
            )

        summary = self._compute_summary(suggestions, conflicts)
        logger.info(
            "optimization_completed",
            policy=self.policy.get_policy_name(),
            tasks_scheduled=summary.tasks_scheduled,
            tasks_unscheduled=summary.tasks_unscheduled,
        )
        return OptimizedSchedule(suggestions=suggestions, conflicts=conflicts, summary=summary)

    def _compute_summary(self, suggestions: List[ScheduleSuggestion], conflicts: List[str]) -> ScheduleSummary:
        """Compute summary statistics for the run."""
        scores = [s.suggested_slot.score for s in suggestions]
        average = sum(scores) / len(scores) if scores else 0

        focus_scores = [s.suggested_slot.score for s in suggestions if s.task.task_type == 'focus']
        return ScheduleSummary(
            tasks_scheduled=len(suggestions),
            tasks_unscheduled=len(conflicts),
            average_score=round_half_up(average),
            focus_time_protected=all(score >= FOCUS_PROTECTED_SCORE for score in focus_scores),
        )

    def rebalance(
        self,
        events: List[Event],
        preferences: Optional[SchedulingPreferences] = None,
        start_date: Optional[DateLike] = None,
        token: Optional[CancellationToken] = None,
    ) -> RebalanceResult:
        """Recommend moving existing events into clearly better slots."""
        prefs = preferences or self.default_preferences()
        first_day = as_date(start_date) if start_date is not None else date.today()
        recommendations: List[RebalanceRecommendation] = []

        for event in events:
            task = Task(
                task_id=event.event_id,
                title=event.title,
                duration=event.duration_minutes,
                priority='medium',
                task_type='focus',
            )
            others = [e for e in events if e.event_id != event.event_id]
            suggestion = self.find_best_slot(task, others, prefs, first_day, token)
            if suggestion is None or suggestion.suggested_slot.score <= self.rebalance_threshold:
                continue

            # Only the hour is compared; a move within the same hour is not worth it.
            current_hour = event.start.replace(minute=0, second=0, microsecond=0)
            suggested_hour = suggestion.suggested_slot.start.replace(minute=0, second=0, microsecond=0)
            if current_hour == suggested_hour:
                continue

            recommendations.append(RebalanceRecommendation(
                event_id=event.event_id,
                current_start=event.start,
                current_end=event.end,
                better_slot=suggestion.suggested_slot,
            ))

        scores = [r.better_slot.score for r in recommendations]
        return RebalanceResult(
            recommendations=recommendations,
            total_events=len(events),
            events_to_move=len(recommendations),
            average_improvement=round_half_up(sum(scores) / len(scores)) if scores else 0,
        )
