"""Calendar event and attendee data models."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ParseError
from ..utils.datetime_utils import at_time, day_of_week, parse_hhmm
from ..utils.intervals import minutes_between
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def _parse_instant(value: Any, record_id: Optional[str], field_name: str, tz: tzinfo) -> datetime:
    """Parse an ISO-8601 string or datetime into a wall-clock datetime in ``tz``.

    Offset-aware values are converted to ``tz`` before the offset is dropped;
    naive values are taken as already being in ``tz``.
    """
    if value is None or value == '':
        raise ParseError(record_id, f"missing {field_name}")

    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            instant = datetime.fromisoformat(text)
        except ValueError:
            raise ParseError(record_id, f"unparseable {field_name}: {value!r}")
    else:
        raise ParseError(record_id, f"unsupported {field_name} type: {type(value).__name__}")

    if instant.tzinfo is not None:
        instant = instant.astimezone(tz)
    return instant.replace(tzinfo=None)


@dataclass(frozen=True)
class Event:
    """A calendar event from the external event store."""

    event_id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    color: Optional[str] = None
    status: Optional[str] = None
    description: str = ''

    def __post_init__(self):
        """Reject empty or inverted intervals."""
        if self.start is None or self.end is None:
            raise ParseError(self.event_id, "missing start or end")
        if self.start >= self.end:
            raise ParseError(
                self.event_id,
                f"start {self.start.isoformat()} is not before end {self.end.isoformat()}",
            )

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.start, self.end)

    @classmethod
    def from_dict(cls, record: Dict[str, Any], tz: tzinfo = timezone.utc) -> 'Event':
        """Build an event from an event-store record, in the wall clock of ``tz``."""
        record_id = record.get('id') or record.get('event_id')
        start = _parse_instant(
            record.get('startsAt', record.get('start')), record_id, 'start', tz
        )
        end = _parse_instant(record.get('endsAt', record.get('end')), record_id, 'end', tz)

        return cls(
            event_id=str(record_id) if record_id is not None else '',
            title=record.get('title', ''),
            start=start,
            end=end,
            all_day=bool(record.get('allDay', record.get('all_day', False))),
            color=record.get('color'),
            status=record.get('status'),
            description=record.get('description') or '',
        )

    @classmethod
    def parse_many(
        cls,
        records: List[Dict[str, Any]],
        skip_invalid: bool = False,
        tz: tzinfo = timezone.utc,
    ) -> List['Event']:
        """Parse a snapshot of records.

        With ``skip_invalid`` malformed records are logged and dropped;
        otherwise the first ``ParseError`` propagates.
        """
        events = []
        for record in records:
            try:
                events.append(cls.from_dict(record, tz))
            except ParseError as exc:
                if not skip_invalid:
                    raise
                logger.warning("record_skipped", record_id=exc.record_id, reason=exc.reason)
        return events

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.event_id,
            'title': self.title,
            'startsAt': self.start.isoformat(),
            'endsAt': self.end.isoformat(),
            'allDay': self.all_day,
            'color': self.color,
            'status': self.status,
        }


@dataclass
class WorkingWindow:
    """One HH:mm working-hours window."""

    start: str
    end: str

    def __post_init__(self):
        """Validate the window bounds."""
        if parse_hhmm(self.start) >= parse_hhmm(self.end):
            raise ValueError(f"Working window {self.start}-{self.end} is empty")

    def bounds(self, day: date) -> Tuple[datetime, datetime]:
        """The window as instants on ``day``; an end of 24:00 is the next midnight."""
        return at_time(day, *parse_hhmm(self.start)), at_time(day, *parse_hhmm(self.end))

    def covers(self, slot_start: datetime, slot_end: datetime) -> bool:
        """Whether a slot lies inside this window on the slot's start day."""
        window_start, window_end = self.bounds(slot_start.date())
        return window_start <= slot_start and slot_end <= window_end


@dataclass
class Attendee:
    """A meeting attendee with their own calendar snapshot."""

    attendee_id: str
    events: List[Event] = field(default_factory=list)
    # Weekday (Sunday=0) -> windows; weekdays without windows use the default.
    working_hours: Dict[int, List[WorkingWindow]] = field(default_factory=dict)
    email: Optional[str] = None
    display_name: Optional[str] = None

    def windows_for(self, day: date) -> List[WorkingWindow]:
        return self.working_hours.get(day_of_week(day)) or []
