"""Conflict detection between calendar events."""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ..models.conflict import ConflictAnalysis, EventConflict
from ..models.event import Event
from ..utils.config import get_section
from ..utils.datetime_utils import DateLike, as_date, at_time
from ..utils.intervals import events_on, minutes_between, overlaps_inclusive, round_half_up
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

CRITICAL_PENALTY = 40
WARNING_PENALTY = 15


def _clock(instant: datetime) -> str:
    """12-hour clock label, e.g. ``9:30 AM``."""
    meridiem = 'AM' if instant.hour < 12 else 'PM'
    return f"{instant.hour % 12 or 12}:{instant.minute:02d} {meridiem}"


def conflict_score(critical_count: int, warning_count: int) -> int:
    """Health score for an event: 100 minus weighted conflict counts, floored at 0."""
    return max(0, 100 - CRITICAL_PENALTY * critical_count - WARNING_PENALTY * warning_count)


class ConflictDetector:
    """Detects overlaps and tight transitions between events."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize detector with configuration."""
        self.config = get_section(config, 'conflicts')
        self.buffer_minutes = self.config['buffer_minutes']

    def detect(
        self,
        event: Event,
        all_events: List[Event],
        buffer_minutes: Optional[int] = None,
    ) -> ConflictAnalysis:
        """Detect conflicts for a single event against all other events."""
        if buffer_minutes is None:
            buffer_minutes = self.buffer_minutes

        conflicts: List[EventConflict] = []
        others = [e for e in events_on(all_events, event.start) if e.event_id != event.event_id]

        for other in others:
            if overlaps_inclusive(event.start, event.end, other.start, other.end):
                conflicts.append(EventConflict(
                    conflict_id=f"overlap-{event.event_id}-{other.event_id}",
                    severity='critical',
                    conflict_type='overlap',
                    message=f'Overlaps with "{other.title}"',
                    conflicting_events=[other],
                    suggestions=self._overlap_suggestions(event, other, all_events),
                ))
                continue

            gap_before = abs(minutes_between(other.end, event.start))
            gap_after = abs(minutes_between(event.end, other.start))
            if gap_before < buffer_minutes or gap_after < buffer_minutes:
                gap = min(gap_before, gap_after)
                conflicts.append(EventConflict(
                    conflict_id=f"tight-{event.event_id}-{other.event_id}",
                    severity='warning',
                    conflict_type='tight-schedule',
                    message=f'Only {gap} min gap with "{other.title}"',
                    conflicting_events=[other],
                    suggestions=[
                        f"Add {buffer_minutes - gap} more minutes buffer",
                        "Move event to create proper spacing",
                    ],
                ))

        analysis = ConflictAnalysis(conflicts=conflicts)
        analysis.score = conflict_score(analysis.critical_count, analysis.warning_count)
        return analysis

    def _overlap_suggestions(self, event: Event, other: Event, all_events: List[Event]) -> List[str]:
        """Shift past the other event, shrink to fit, or defer to a free slot."""
        duration = timedelta(minutes=event.duration_minutes)
        suggestions = [f"Move to {_clock(other.end)} - {_clock(other.end + duration)}"]

        fit = minutes_between(event.start, other.start)
        if fit > 0:
            suggestions.append(f"Shorten duration to {fit} minutes")

        alternatives = self.find_alternative_slots(event, all_events, max_suggestions=1)
        if alternatives:
            suggestions.append(f"Move to next available slot at {_clock(alternatives[0])}")
        else:
            suggestions.append("Move to next available slot")
        return suggestions

    def detect_all(
        self,
        events: List[Event],
        range_start: DateLike,
        range_end: DateLike,
        buffer_minutes: Optional[int] = None,
    ) -> Dict[str, ConflictAnalysis]:
        """Map event id to analysis for conflicting events in an inclusive day range."""
        first, last = as_date(range_start), as_date(range_end)
        results: Dict[str, ConflictAnalysis] = {}

        for event in events:
            if not (first <= event.start.date() <= last):
                continue
            analysis = self.detect(event, events, buffer_minutes)
            if analysis.has_conflicts:
                results[event.event_id] = analysis

        logger.debug(
            "conflicts_detected",
            range_start=first.isoformat(),
            range_end=last.isoformat(),
            conflicting_events=len(results),
        )
        return results

    def find_alternative_slots(
        self,
        event: Event,
        all_events: List[Event],
        max_suggestions: Optional[int] = None,
    ) -> List[datetime]:
        """Conflict-free start times on the event's day, first-fit in grid order."""
        if max_suggestions is None:
            max_suggestions = self.config['max_suggestions']

        duration = timedelta(minutes=event.duration_minutes)
        step = timedelta(minutes=self.config['alternative_step_minutes'])
        slot_start = at_time(event.start, self.config['alternative_start_hour'])
        work_end = at_time(event.start, self.config['alternative_end_hour'])

        others = [e for e in all_events if e.event_id != event.event_id]
        suggestions: List[datetime] = []

        while slot_start < work_end and len(suggestions) < max_suggestions:
            slot_end = slot_start + duration
            if slot_end <= work_end and not any(
                overlaps_inclusive(slot_start, slot_end, e.start, e.end) for e in others
            ):
                suggestions.append(slot_start)
            slot_start += step

        return suggestions

    def daily_conflict_score(self, events: List[Event], day: DateLike) -> int:
        """Mean conflict score of a day's events; 100 for an empty day."""
        same_day = events_on(events, day)
        if not same_day:
            return 100
        total = sum(self.detect(event, events).score for event in same_day)
        return round_half_up(total / len(same_day))
