"""Tests for availability/engine/goals.py

Goal sessions are drawn from a two-week horizon of candidate slots,
spread evenly, and tracked with streak counters and period progress.
"""

from datetime import datetime, timedelta

import pytest

from availability.engine.goals import GoalSessionScheduler, period_bounds, sessions_needed
from availability.errors import InvalidGoalError
from availability.models import Goal, GoalSession


@pytest.fixture
def scheduler():
    return GoalSessionScheduler()


def _stamps(slots):
    return [s.strftime("%a %d %H:%M") for s in slots]


# ─────────────────────────────────────────────────────────────────────────────
# Session Counts and Validation
# ─────────────────────────────────────────────────────────────────────────────


class TestSessionsNeeded:
    """Tests for sessions_needed()."""

    @pytest.mark.parametrize(
        "frequency,target,expected",
        [("daily", 3, 3), ("weekly", 3, 6), ("monthly", 3, 2), ("monthly", 4, 2), ("monthly", 5, 3)],
    )
    def test_horizon_multipliers(self, frequency, target, expected):
        """Weekly doubles, monthly halves rounding up, daily is unchanged."""
        goal = Goal("g", "Goal", frequency=frequency, target_count=target)
        assert sessions_needed(goal) == expected


class TestGoalValidation:
    """Tests for Goal defaults and validate()."""

    def test_category_default_duration(self):
        """Sessions default to the category's length."""
        assert Goal("g", "Sit", category="meditation").duration_minutes == 15
        assert Goal("g", "Run", category="exercise", duration_minutes=50).duration_minutes == 50

    @pytest.mark.parametrize(
        "overrides",
        [
            {"frequency": "yearly"},
            {"target_count": 0},
            {"duration_minutes": 0},
            {"preferred_time_start": "17:00", "preferred_time_end": "09:00"},
            {"preferred_time_start": "nine"},
        ],
    )
    def test_invalid_goals(self, scheduler, monday, overrides):
        """Unschedulable definitions raise InvalidGoalError."""
        goal = Goal("g", "Goal", **overrides)
        with pytest.raises(InvalidGoalError):
            scheduler.schedule_sessions(goal, [], start=monday)


# ─────────────────────────────────────────────────────────────────────────────
# Slot Search and Selection
# ─────────────────────────────────────────────────────────────────────────────


class TestFindAvailableSlots:
    """Tests for find_available_slots()."""

    def _window_goal(self, **overrides):
        values = dict(
            preferred_days=list(range(7)),
            allow_weekends=True,
            preferred_time_start="07:00",
            preferred_time_end="20:00",
            duration_minutes=60,
        )
        values.update(overrides)
        return Goal("g", "Goal", **values)

    def test_morning_and_evening_cutoffs(self, scheduler, monday):
        """Slots before 09:00 or from 18:00 need explicit permission."""
        next_day = monday + timedelta(days=1)
        plain = scheduler.find_available_slots(self._window_goal(), [], monday, next_day)
        mornings = scheduler.find_available_slots(self._window_goal(allow_mornings=True), [], monday, next_day)
        both = scheduler.find_available_slots(
            self._window_goal(allow_mornings=True, allow_evenings=True), [], monday, next_day
        )

        assert (len(plain), plain[0].strftime("%H:%M"), plain[-1].strftime("%H:%M")) == (18, "09:00", "17:30")
        assert (len(mornings), mornings[0].strftime("%H:%M")) == (22, "07:00")
        assert (len(both), both[-1].strftime("%H:%M")) == (25, "19:00")

    def test_buffer_around_events(self, scheduler, make_event, monday):
        """Slots within the buffer of an event are skipped."""
        goal = self._window_goal(preferred_time_start="09:00", preferred_time_end="17:00")
        lunch = make_event("lunch", "12:00", "13:00")
        slots = scheduler.find_available_slots(goal, [lunch], monday, monday + timedelta(days=1))
        assert [s.strftime("%H:%M") for s in slots] == [
            "09:00", "09:30", "10:00", "10:30", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
        ]

    def test_weekends_need_permission(self, scheduler, monday):
        """A weekend-only range yields nothing by default."""
        goal = self._window_goal(allow_weekends=False)
        saturday = monday + timedelta(days=5)
        assert scheduler.find_available_slots(goal, [], saturday, saturday + timedelta(days=2)) == []

    def test_datetime_start_skips_earlier_slots(self, scheduler, at, monday):
        """Starting mid-day only offers the rest of that day."""
        goal = self._window_goal(preferred_time_start="09:00", preferred_time_end="17:00")
        slots = scheduler.find_available_slots(goal, [], at("12:00"), monday + timedelta(days=1))
        assert slots[0] == at("12:00")
        assert len(slots) == 9


class TestScheduleSessions:
    """Tests for schedule_sessions()."""

    def test_takes_first_slots_when_tight(self, scheduler, make_event, monday):
        """Nine slots for six sessions keeps the first six in order."""
        goal = Goal(
            "g", "Piano", frequency="weekly", target_count=3, duration_minutes=60,
            preferred_days=[1, 3, 5],
            preferred_time_start="09:00", preferred_time_end="10:30",
        )
        events = [make_event(f"x{i}", "09:00", "09:15", offset_days=i) for i in (0, 2, 4)]
        result = scheduler.schedule_sessions(goal, events, start=monday)

        assert result.available_slot_count == 9
        assert result.sessions_needed == 6
        assert _stamps(s.scheduled_for for s in result.sessions) == [
            "Mon 03 09:30", "Wed 05 09:30", "Fri 07 09:30",
            "Mon 10 09:00", "Mon 10 09:30", "Wed 12 09:00",
        ]
        assert all(s.status == "scheduled" and s.duration_minutes == 60 for s in result.sessions)

    def test_default_days_are_weekdays(self):
        """Preferred days count from Sunday=0, so the default is Monday to Friday."""
        assert Goal("g", "Read").preferred_days == [1, 2, 3, 4, 5]

    def test_sunday_preference(self, scheduler, monday):
        """Day 0 is Sunday and still needs weekend permission."""
        goal = Goal("g", "Hike", target_count=1, duration_minutes=60, preferred_days=[0],
                    preferred_time_start="09:00", preferred_time_end="10:00")
        assert scheduler.schedule_sessions(goal, [], start=monday).available_slot_count == 0

        goal.allow_weekends = True
        result = scheduler.schedule_sessions(goal, [], start=monday)
        assert _stamps(s.scheduled_for for s in result.sessions) == ["Sun 09 09:00", "Sun 16 09:00"]

    def test_spreads_sessions_evenly(self, scheduler, monday):
        """Ten slots for two sessions picks every fifth slot."""
        goal = Goal("g", "Review", target_count=1, duration_minutes=60,
                    preferred_time_start="09:00", preferred_time_end="10:00")
        result = scheduler.schedule_sessions(goal, [], start=monday)
        assert result.available_slot_count == 10
        assert _stamps(s.scheduled_for for s in result.sessions) == ["Mon 03 09:00", "Mon 10 09:00"]

    def test_never_exceeds_needed_or_available(self, scheduler, make_event, monday):
        """Scheduled count is bounded by both need and supply."""
        goal = Goal("g", "Walk", frequency="daily", target_count=5, duration_minutes=60,
                    preferred_time_start="09:00", preferred_time_end="10:00")
        busy = [make_event(f"b{i}", "08:00", "18:00", offset_days=i) for i in range(14) if i not in (0, 1)]
        result = scheduler.schedule_sessions(goal, busy, start=monday)
        assert result.available_slot_count == 2
        assert result.scheduled_count == 2

    def test_paused_goal_schedules_nothing(self, scheduler, monday):
        """Paused goals are skipped until their pause ends."""
        goal = Goal("g", "Swim")
        scheduler.pause_goal(goal, until=datetime(2025, 11, 10))
        assert scheduler.schedule_sessions(goal, [], start=monday).scheduled_count == 0

        later = monday + timedelta(days=7)
        assert scheduler.schedule_sessions(goal, [], start=later).scheduled_count == 2

        scheduler.resume_goal(goal)
        assert scheduler.is_paused(goal, monday) is False


# ─────────────────────────────────────────────────────────────────────────────
# Streaks and Progress
# ─────────────────────────────────────────────────────────────────────────────


class TestStreaks:
    """Tests for complete_session() and skip_session()."""

    def _session(self, goal, at, offset):
        return GoalSession(goal.goal_id, at("09:00", offset_days=offset), 30)

    def test_streak_counters(self, scheduler, at):
        """Completions extend the streak; a plain skip resets it."""
        goal = Goal("g", "Read")
        for offset in range(3):
            scheduler.complete_session(goal, self._session(goal, at, offset), completed_at=at("10:00", offset_days=offset))
            assert goal.longest_streak >= goal.current_streak

        assert (goal.current_streak, goal.longest_streak, goal.total_completed) == (3, 3, 3)
        assert goal.last_completed_at == at("10:00", offset_days=2)

        skipped = scheduler.skip_session(goal, self._session(goal, at, 3))
        assert skipped.status == "skipped"
        assert (goal.current_streak, goal.longest_streak) == (0, 3)

    def test_reschedule_keeps_streak(self, scheduler, at):
        """Rescheduling is not a miss."""
        goal = Goal("g", "Read", current_streak=2, longest_streak=2)
        session = scheduler.skip_session(goal, self._session(goal, at, 0), reschedule=True)
        assert session.status == "rescheduled"
        assert goal.current_streak == 2

    def test_completion_records_notes(self, scheduler, at):
        """Completion stamps the session."""
        goal = Goal("g", "Read")
        session = scheduler.complete_session(goal, self._session(goal, at, 0), completed_at=at("09:30"), notes="ch. 4")
        assert (session.status, session.completed_at, session.notes) == ("completed", at("09:30"), "ch. 4")

    def test_repeat_completion_is_ignored(self, scheduler, at):
        """Completing the same session twice counts once."""
        goal = Goal("g", "Read")
        session = self._session(goal, at, 0)
        scheduler.complete_session(goal, session, completed_at=at("10:00"))
        again = scheduler.complete_session(goal, session, completed_at=at("11:00"))

        assert again is session
        assert again.completed_at == at("10:00")
        assert (goal.current_streak, goal.longest_streak, goal.total_completed) == (1, 1, 1)

    def test_foreign_session_rejected(self, scheduler, at):
        """Sessions of another goal cannot be completed."""
        goal = Goal("g", "Read")
        other = GoalSession("other", at("09:00"), 30)
        with pytest.raises(ValueError):
            scheduler.complete_session(goal, other)


class TestProgress:
    """Tests for get_goal_progress() and period_bounds()."""

    def _done(self, goal_id, when):
        return GoalSession(goal_id, when, 30, status="completed", completed_at=when)

    def test_weekly_progress(self, scheduler, at):
        """Wednesday noon expects 60/168 of the weekly target."""
        goal = Goal("g", "Gym", frequency="weekly", target_count=3)
        now = at("12:00", offset_days=2)
        sessions = [
            self._done("g", at("18:00", offset_days=-1)),  # previous Sunday
            self._done("g", at("08:00", offset_days=1)),
            self._done("other", at("08:00", offset_days=1)),
        ]

        behind = scheduler.get_goal_progress(goal, sessions, now=now)
        assert behind.period_start == at("00:00")
        assert behind.period_end == at("00:00", offset_days=7)
        assert behind.completed == 1
        assert behind.expected_progress == pytest.approx(60 / 168 * 3)
        assert behind.on_track is False

        sessions.append(self._done("g", at("07:00", offset_days=2)))
        ahead = scheduler.get_goal_progress(goal, sessions, now=now)
        assert ahead.completed == 2
        assert ahead.percent_complete == pytest.approx(200 / 3)
        assert ahead.on_track is True

    def test_daily_progress(self, scheduler, at):
        """At noon half of a daily target is expected."""
        goal = Goal("g", "Stretch", frequency="daily", target_count=1)
        progress = scheduler.get_goal_progress(goal, [], now=at("12:00"))
        assert progress.expected_progress == pytest.approx(0.5)
        assert progress.on_track is False

    def test_percent_is_capped(self, scheduler, at):
        """Overachieving reports 100 percent."""
        goal = Goal("g", "Stretch", frequency="daily", target_count=1)
        sessions = [self._done("g", at("08:00")), self._done("g", at("09:00"))]
        assert scheduler.get_goal_progress(goal, sessions, now=at("12:00")).percent_complete == 100.0

    def test_month_rolls_over_year(self):
        """December runs to the first of January."""
        start, end = period_bounds("monthly", datetime(2025, 12, 20, 15, 0))
        assert start == datetime(2025, 12, 1)
        assert end == datetime(2026, 1, 1)

    def test_unknown_frequency(self):
        """Unknown periods are rejected."""
        with pytest.raises(ValueError):
            period_bounds("hourly", datetime(2025, 11, 3))
