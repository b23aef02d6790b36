"""Multi-attendee meeting time search."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.blocks import AvailabilitySummary, FindTimeResult, TimeSlot
from ..models.event import Attendee, WorkingWindow
from ..utils.cancellation import CancellationToken, check_cancelled
from ..utils.config import get_section
from ..utils.datetime_utils import DateLike, as_date, at_time, days_in_range, is_weekend
from ..utils.intervals import clamp, overlaps
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

# Hour windows that earn the time-of-day bonus.
PREFERRED_WINDOWS = {
    'morning': (9, 12),
    'afternoon': (13, 17),
}


@dataclass
class FindTimeOptions:
    """Parameters of a find-time search."""

    duration: int  # minutes
    start_date: DateLike
    end_date: DateLike
    start_hour: int = 9
    end_hour: int = 17
    slot_interval: int = 30
    exclude_weekends: bool = True
    required_attendee_ids: List[str] = field(default_factory=list)
    preferred_time_of_day: str = 'any'  # morning, afternoon or any


class FindTimeEngine:
    """Intersects attendee calendars to find meeting slots."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize engine with configuration."""
        self.config = get_section(config, 'find_time')
        self.default_window = WorkingWindow(
            self.config['default_working_start'], self.config['default_working_end']
        )

    def options(self, duration: int, start_date: DateLike, end_date: DateLike, **overrides) -> FindTimeOptions:
        """Build search options from the configured defaults."""
        values = {
            'start_hour': self.config['start_hour'],
            'end_hour': self.config['end_hour'],
            'slot_interval': self.config['slot_interval'],
            'exclude_weekends': self.config['exclude_weekends'],
        }
        values.update(overrides)
        return FindTimeOptions(duration=duration, start_date=start_date, end_date=end_date, **values)

    def has_event_conflict(self, attendee: Attendee, slot_start: datetime, slot_end: datetime) -> bool:
        """Whether the slot overlaps any of the attendee's events."""
        return any(overlaps(slot_start, slot_end, e.start, e.end) for e in attendee.events)

    def is_within_working_hours(self, attendee: Attendee, slot_start: datetime, slot_end: datetime) -> bool:
        """Whether the slot fits one of the attendee's windows for that weekday."""
        windows = attendee.windows_for(slot_start) or [self.default_window]
        return any(window.covers(slot_start, slot_end) for window in windows)

    def score_slot(self, slot: TimeSlot, options: FindTimeOptions, attendee_count: int) -> float:
        """Quality score in [0, 1]."""
        score = 1.0

        if attendee_count:
            score -= 0.5 * (len(slot.conflicts) / attendee_count)

        hour = slot.start.hour
        window = PREFERRED_WINDOWS.get(options.preferred_time_of_day)
        if window and window[0] <= hour < window[1]:
            score += 0.1

        if slot.start.minute == 0:
            score += 0.05

        if hour < 9 or hour >= 17:
            score -= 0.2

        return clamp(score, 0.0, 1.0)

    def _day_slots(self, day, attendees: List[Attendee], options: FindTimeOptions) -> List[TimeSlot]:
        required = set(options.required_attendee_ids)
        duration = timedelta(minutes=options.duration)
        step = timedelta(minutes=options.slot_interval)
        slot_start = at_time(day, options.start_hour)
        day_end = at_time(day, options.end_hour)
        slots: List[TimeSlot] = []

        while slot_start + duration <= day_end:
            slot_end = slot_start + duration
            conflicts = [
                attendee.attendee_id
                for attendee in attendees
                if self.has_event_conflict(attendee, slot_start, slot_end)
                or not self.is_within_working_hours(attendee, slot_start, slot_end)
            ]

            if not required.intersection(conflicts):
                slot = TimeSlot(
                    start=slot_start,
                    end=slot_end,
                    available=not conflicts,
                    conflicts=conflicts,
                )
                slot.score = self.score_slot(slot, options, len(attendees))
                slots.append(slot)

            slot_start += step

        return slots

    def find_available_times(
        self,
        attendees: List[Attendee],
        options: FindTimeOptions,
        token: Optional[CancellationToken] = None,
    ) -> List[FindTimeResult]:
        """Per-day candidate slots and the best available picks."""
        if options.duration <= 0:
            raise ValueError(f"duration must be positive, got {options.duration}")
        if options.slot_interval <= 0:
            raise ValueError(f"slot_interval must be positive, got {options.slot_interval}")
        if not attendees:
            return []

        results: List[FindTimeResult] = []
        for day in days_in_range(options.start_date, options.end_date):
            check_cancelled(token, "find_available_times")
            if options.exclude_weekends and is_weekend(day):
                continue

            slots = self._day_slots(day, attendees, options)
            best = sorted((s for s in slots if s.available), key=lambda s: s.score, reverse=True)[:3]
            results.append(FindTimeResult(date=day, slots=slots, best_slots=best))

        logger.debug(
            "find_time_completed",
            attendees=len(attendees),
            days=len(results),
            available_slots=sum(len(r.best_slots) for r in results),
        )
        return results

    def suggest_next_available(
        self,
        attendees: List[Attendee],
        duration: int,
        start_from: DateLike,
        token: Optional[CancellationToken] = None,
    ) -> Optional[TimeSlot]:
        """Top slot of the first day with availability in the next two weeks."""
        first = as_date(start_from)
        options = self.options(
            duration, first, first + timedelta(days=self.config['suggest_days']), exclude_weekends=True
        )
        for day_result in self.find_available_times(attendees, options, token):
            if day_result.best_slots:
                return day_result.best_slots[0]
        return None


def availability_summary(results: List[FindTimeResult]) -> Optional[AvailabilitySummary]:
    """Summarize a search; None when there were no days."""
    if not results:
        return None

    total = sum(len(r.slots) for r in results)
    available = sum(1 for r in results for s in r.slots if s.available)
    best_overall = sorted(
        (s for r in results for s in r.best_slots), key=lambda s: s.score, reverse=True
    )[:5]

    return AvailabilitySummary(
        total_slots=total,
        available_slots=available,
        availability_percentage=(available / total * 100) if total else 0.0,
        best_overall_slots=best_overall,
        days_with_availability=sum(1 for r in results if r.best_slots),
    )
