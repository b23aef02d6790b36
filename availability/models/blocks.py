"""Free-time block and meeting slot models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List

from ..utils.datetime_utils import time_of_day
from ..utils.intervals import minutes_between

SHORT_BLOCK_MINUTES = 30
LONG_BLOCK_MINUTES = 120


def block_category(duration: int) -> str:
    """Categorize block by duration."""
    if duration < SHORT_BLOCK_MINUTES:
        return 'short'
    if duration < LONG_BLOCK_MINUTES:
        return 'medium'
    return 'long'


def block_quality(period: str, duration: int) -> str:
    """Rate a block for focused work.

    Long morning/afternoon blocks are high quality, hour-plus blocks
    outside the night are medium, everything else is low.
    """
    if duration >= LONG_BLOCK_MINUTES and period in ('morning', 'afternoon'):
        return 'high'
    if duration >= 60 and period != 'night':
        return 'medium'
    return 'low'


@dataclass(frozen=True)
class TimeBlock:
    """A contiguous free span; every attribute derives from start and end."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> int:
        return minutes_between(self.start, self.end)

    @property
    def time_of_day(self) -> str:
        return time_of_day(self.start)

    @property
    def category(self) -> str:
        return block_category(self.duration)

    @property
    def quality(self) -> str:
        return block_quality(self.time_of_day, self.duration)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'duration': self.duration,
            'timeOfDay': self.time_of_day,
            'category': self.category,
            'quality': self.quality,
        }


@dataclass
class TimeBlockAnalysis:
    """One day's free time and the views derived from it."""

    date: date
    free_blocks: List[TimeBlock] = field(default_factory=list)

    @property
    def total_free_time(self) -> int:
        return sum(block.duration for block in self.free_blocks)

    @property
    def recommended_blocks(self) -> List[TimeBlock]:
        """Best blocks for focused work, longest first."""
        candidates = [
            b for b in self.free_blocks
            if b.quality == 'high' or (b.quality == 'medium' and b.duration >= 90)
        ]
        return sorted(candidates, key=lambda b: b.duration, reverse=True)

    @property
    def short_breaks(self) -> List[TimeBlock]:
        return [b for b in self.free_blocks if b.category == 'short']

    @property
    def meeting_slots(self) -> List[TimeBlock]:
        return [b for b in self.free_blocks if 30 <= b.duration <= 60]

    @property
    def deep_work_slots(self) -> List[TimeBlock]:
        return [b for b in self.free_blocks if b.duration >= LONG_BLOCK_MINUTES]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'totalFreeTime': self.total_free_time,
            'freeBlocks': [b.to_dict() for b in self.free_blocks],
            'recommendedBlocks': [b.to_dict() for b in self.recommended_blocks],
            'shortBreaks': [b.to_dict() for b in self.short_breaks],
            'meetingSlots': [b.to_dict() for b in self.meeting_slots],
            'deepWorkSlots': [b.to_dict() for b in self.deep_work_slots],
        }


@dataclass
class TimeSlot:
    """A candidate meeting slot scored across attendees."""

    start: datetime
    end: datetime
    available: bool
    conflicts: List[str] = field(default_factory=list)
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'available': self.available,
            'conflicts': list(self.conflicts),
            'score': self.score,
        }


@dataclass
class FindTimeResult:
    """Candidate slots for one day."""

    date: date
    slots: List[TimeSlot] = field(default_factory=list)
    best_slots: List[TimeSlot] = field(default_factory=list)


@dataclass
class AvailabilitySummary:
    """Roll-up of a find-time search."""

    total_slots: int
    available_slots: int
    availability_percentage: float
    best_overall_slots: List[TimeSlot]
    days_with_availability: int
