"""Conflict analysis models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .event import Event

SEVERITIES = ('critical', 'warning', 'info')
CONFLICT_TYPES = ('overlap', 'tight-schedule')


@dataclass
class EventConflict:
    """A single problem between an event and one other event."""

    conflict_id: str
    severity: str
    conflict_type: str
    message: str
    conflicting_events: List[Event] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.conflict_id,
            'severity': self.severity,
            'type': self.conflict_type,
            'message': self.message,
            'conflictingEventIds': [e.event_id for e in self.conflicting_events],
            'suggestions': list(self.suggestions),
        }


@dataclass
class ConflictAnalysis:
    """Conflicts for one event plus a 0-100 health score."""

    conflicts: List[EventConflict] = field(default_factory=list)
    score: int = 100

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def critical_count(self) -> int:
        return sum(1 for c in self.conflicts if c.severity == 'critical')

    @property
    def warning_count(self) -> int:
        return sum(1 for c in self.conflicts if c.severity == 'warning')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hasConflicts': self.has_conflicts,
            'conflicts': [c.to_dict() for c in self.conflicts],
            'score': self.score,
        }
