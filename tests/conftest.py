"""Shared test fixtures for the scheduling engine tests.

All scenarios are anchored on a fixed week so results never depend on
the day the suite runs:

    Monday 2025-11-03 .. Sunday 2025-11-09

Usage:
    def test_something(make_event, monday):
        standup = make_event("standup", "09:00", "09:15")
        ...
"""

from datetime import date, datetime, timedelta

import pytest

from availability.models import Event


# ─────────────────────────────────────────────────────────────────────────────
# Calendar Anchors
# ─────────────────────────────────────────────────────────────────────────────

MONDAY = date(2025, 11, 3)


@pytest.fixture
def monday() -> date:
    """The Monday every scenario is anchored on."""
    return MONDAY


@pytest.fixture
def at():
    """Build a datetime from a day and an ``HH:mm`` string.

    Returns:
        Callable ``at(hhmm, day=MONDAY, offset_days=0)``
    """

    def _at(hhmm: str, day: date = MONDAY, offset_days: int = 0) -> datetime:
        hour, minute = (int(part) for part in hhmm.split(":"))
        base = datetime.combine(day + timedelta(days=offset_days), datetime.min.time())
        return base + timedelta(hours=hour, minutes=minute)

    return _at


# ─────────────────────────────────────────────────────────────────────────────
# Event Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_event(at):
    """Factory for events on the anchor week.

    Returns:
        Callable ``make_event(event_id, start, end, offset_days=0, title=None)``
    """

    def _make(event_id: str, start: str, end: str, offset_days: int = 0, title: str = None) -> Event:
        return Event(
            event_id=event_id,
            title=title or event_id,
            start=at(start, offset_days=offset_days),
            end=at(end, offset_days=offset_days),
        )

    return _make


@pytest.fixture
def busy_rest_of_week(make_event):
    """Tuesday through Sunday booked solid from 08:00 to 18:00."""
    return [make_event(f"full-{offset}", "08:00", "18:00", offset_days=offset) for offset in range(1, 7)]
