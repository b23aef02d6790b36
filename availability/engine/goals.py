"""Recurring goal session scheduling and progress tracking."""

import math
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..models.event import Event
from ..models.goal import Goal, GoalProgress, GoalScheduleResult, GoalSession
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.config import get_section
from ..utils.datetime_utils import (
    DateLike,
    as_date,
    at_time,
    is_weekend,
    is_working_day,
    parse_hhmm,
    start_of_day,
)
from ..utils.intervals import overlaps
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def sessions_needed(goal: Goal) -> int:
    """Sessions to place over the two-week horizon."""
    if goal.frequency == 'weekly':
        return goal.target_count * 2
    if goal.frequency == 'monthly':
        return math.ceil(goal.target_count / 2)
    return goal.target_count


def period_bounds(frequency: str, now: datetime) -> Tuple[datetime, datetime]:
    """Half-open [start, end) of the period containing ``now``."""
    day_start = start_of_day(now)
    if frequency == 'daily':
        return day_start, day_start + timedelta(days=1)
    if frequency == 'weekly':
        week_start = day_start - timedelta(days=now.weekday())
        return week_start, week_start + timedelta(days=7)
    if frequency == 'monthly':
        month_start = day_start.replace(day=1)
        if month_start.month == 12:
            next_month = month_start.replace(year=month_start.year + 1, month=1)
        else:
            next_month = month_start.replace(month=month_start.month + 1)
        return month_start, next_month
    raise ValueError(f"Unknown frequency: {frequency}")


class GoalSessionScheduler:
    """Distributes goal sessions over free time and tracks streaks."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize scheduler with configuration."""
        self.config = get_section(config, 'goals')
        self.horizon_days = self.config['horizon_days']
        self.step = timedelta(minutes=self.config['step_minutes'])
        self.morning_cutoff = self.config['morning_cutoff_hour']
        self.evening_cutoff = self.config['evening_cutoff_hour']

    def find_available_slots(
        self,
        goal: Goal,
        existing_events: List[Event],
        start: DateLike,
        end: DateLike,
        token: Optional[CancellationToken] = None,
    ) -> List[datetime]:
        """Chronological session start times on days in ``[start, end)``.

        When ``start`` is a datetime, slots before it are not offered.
        """
        duration = timedelta(minutes=goal.duration_minutes)
        buffer = timedelta(minutes=goal.buffer_minutes or self.config['default_buffer_minutes'])
        window_start = parse_hhmm(goal.preferred_time_start)
        window_end = parse_hhmm(goal.preferred_time_end)
        not_before = start if isinstance(start, datetime) else None

        slots: List[datetime] = []
        day = as_date(start)
        last = as_date(end)

        while day < last:
            check_cancelled(token, "schedule_sessions")
            if not is_working_day(day, goal.preferred_days) or (not goal.allow_weekends and is_weekend(day)):
                day += timedelta(days=1)
                continue

            slot = at_time(day, *window_start)
            day_end = at_time(day, *window_end)

            while slot + duration <= day_end:
                if not self._allowed(goal, slot, not_before):
                    slot += self.step
                    continue

                padded_start, padded_end = slot - buffer, slot + duration + buffer
                if not any(overlaps(padded_start, padded_end, e.start, e.end) for e in existing_events):
                    slots.append(slot)
                slot += self.step

            day += timedelta(days=1)

        return slots

    def _allowed(self, goal: Goal, slot: datetime, not_before: Optional[datetime]) -> bool:
        if not_before is not None and slot < not_before:
            return False
        if not goal.allow_mornings and slot.hour < self.morning_cutoff:
            return False
        if not goal.allow_evenings and slot.hour >= self.evening_cutoff:
            return False
        return True

    def schedule_sessions(
        self,
        goal: Goal,
        existing_events: List[Event],
        start: Optional[DateLike] = None,
        horizon_days: Optional[int] = None,
        token: Optional[CancellationToken] = None,
    ) -> GoalScheduleResult:
        """Pick evenly spaced sessions from the available slots.

        The sessions are intents: creating calendar events and storing the
        sessions is left to the caller.
        """
        goal.validate()
        begin = start if start is not None else datetime.now()
        days = horizon_days if horizon_days is not None else self.horizon_days
        needed = sessions_needed(goal)

        if self.is_paused(goal, begin):
            logger.info("goal_paused", goal_id=goal.goal_id)
            return GoalScheduleResult(goal.goal_id, [], 0, needed)

        available = self.find_available_slots(
            goal, existing_events, begin, as_date(begin) + timedelta(days=days), token
        )

        interval = max(1, len(available) // needed)
        selected = [slot for i, slot in enumerate(available) if i % interval == 0][:needed]
        sessions = [
            GoalSession(
                goal_id=goal.goal_id,
                scheduled_for=slot,
                duration_minutes=goal.duration_minutes,
            )
            for slot in selected
        ]

        logger.info(
            "goal_sessions_selected",
            goal_id=goal.goal_id,
            available_slots=len(available),
            sessions_needed=needed,
            scheduled=len(sessions),
        )
        return GoalScheduleResult(
            goal_id=goal.goal_id,
            sessions=sessions,
            available_slot_count=len(available),
            sessions_needed=needed,
        )

    def complete_session(
        self,
        goal: Goal,
        session: GoalSession,
        completed_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> GoalSession:
        """Mark a session completed and extend the goal's streak by one.

        Completing an already completed session changes nothing.
        """
        self._check_owner(goal, session)
        if session.status == 'completed':
            logger.debug("session_already_completed", goal_id=goal.goal_id, session_id=session.session_id)
            return session

        when = completed_at or datetime.now()

        session.status = 'completed'
        session.completed_at = when
        if notes is not None:
            session.notes = notes

        goal.total_completed += 1
        goal.current_streak += 1
        goal.longest_streak = max(goal.longest_streak, goal.current_streak)
        goal.last_completed_at = when
        return session

    def skip_session(self, goal: Goal, session: GoalSession, reschedule: bool = False) -> GoalSession:
        """Skip a session; only a skip without reschedule breaks the streak."""
        self._check_owner(goal, session)
        session.status = 'rescheduled' if reschedule else 'skipped'
        if not reschedule:
            goal.current_streak = 0
        return session

    def get_goal_progress(
        self,
        goal: Goal,
        sessions: List[GoalSession],
        now: Optional[datetime] = None,
    ) -> GoalProgress:
        """Completion against the time-prorated target for the current period."""
        now = now or datetime.now()
        period_start, period_end = period_bounds(goal.frequency, now)

        completed = sum(
            1 for s in sessions
            if s.goal_id == goal.goal_id
            and s.status == 'completed'
            and s.completed_at is not None
            and period_start <= s.completed_at < period_end
        )

        elapsed_hours = int((now - period_start).total_seconds() // 3600)
        total_hours = (period_end - period_start).total_seconds() / 3600
        expected = (elapsed_hours / total_hours) * goal.target_count

        return GoalProgress(
            goal_id=goal.goal_id,
            period_start=period_start,
            period_end=period_end,
            completed=completed,
            target=goal.target_count,
            percent_complete=min(100.0, completed / goal.target_count * 100) if goal.target_count else 0.0,
            expected_progress=expected,
            on_track=completed >= expected,
        )

    def is_paused(self, goal: Goal, at: DateLike) -> bool:
        """Paused indefinitely, or until an instant still in the future."""
        if not goal.is_paused:
            return False
        if goal.paused_until is None:
            return True
        moment = at if isinstance(at, datetime) else start_of_day(at)
        return moment < goal.paused_until

    def pause_goal(self, goal: Goal, until: Optional[datetime] = None) -> Goal:
        goal.is_paused = True
        goal.paused_until = until
        return goal

    def resume_goal(self, goal: Goal) -> Goal:
        goal.is_paused = False
        goal.paused_until = None
        return goal

    @staticmethod
    def _check_owner(goal: Goal, session: GoalSession) -> None:
        if session.goal_id != goal.goal_id:
            raise ValueError(
                f"Session for goal {session.goal_id!r} does not belong to goal {goal.goal_id!r}"
            )
