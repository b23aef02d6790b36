"""Free time block analysis."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..models.blocks import TimeBlock, TimeBlockAnalysis
from ..models.event import Event
from ..utils.config import get_section
from ..utils.datetime_utils import DateLike, as_date, at_time
from ..utils.intervals import minutes_between
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class TimeBlockAnalyzer:
    """Finds and classifies the free blocks of a working day."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize analyzer with configuration."""
        self.config = get_section(config, 'time_blocks')
        self.workday_start_hour = self.config['workday_start_hour']
        self.workday_end_hour = self.config['workday_end_hour']
        self.min_block_minutes = self.config['min_block_minutes']

    def analyze(
        self,
        day: DateLike,
        events: List[Event],
        workday_start_hour: Optional[int] = None,
        workday_end_hour: Optional[int] = None,
        min_block_minutes: Optional[int] = None,
    ) -> TimeBlockAnalysis:
        """Find free time blocks for a given date."""
        if workday_start_hour is None:
            workday_start_hour = self.workday_start_hour
        if workday_end_hour is None:
            workday_end_hour = self.workday_end_hour
        if min_block_minutes is None:
            min_block_minutes = self.min_block_minutes

        target = as_date(day)
        work_start = at_time(target, workday_start_hour)
        work_end = at_time(target, workday_end_hour)

        day_events = sorted(
            (e for e in events if e.start.date() == target),
            key=lambda e: e.start,
        )

        free_blocks: List[TimeBlock] = []
        cursor = work_start

        for event in day_events:
            gap_end = min(event.start, work_end)
            if cursor < gap_end and minutes_between(cursor, gap_end) >= min_block_minutes:
                free_blocks.append(TimeBlock(cursor, gap_end))
            # Overlapping events merge here: the cursor never moves backwards.
            cursor = max(cursor, event.end)

        if cursor < work_end and minutes_between(cursor, work_end) >= min_block_minutes:
            free_blocks.append(TimeBlock(cursor, work_end))

        return TimeBlockAnalysis(date=target, free_blocks=free_blocks)

    def analyze_days(
        self,
        days: List[DateLike],
        events: List[Event],
        max_workers: Optional[int] = None,
    ) -> List[TimeBlockAnalysis]:
        """Analyze independent days in parallel, preserving input order."""
        workers = max_workers or self.config['max_workers']
        if workers <= 1 or len(days) <= 1:
            return [self.analyze(day, events) for day in days]

        snapshot = list(events)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda day: self.analyze(day, snapshot), days))

    def analyze_week(
        self,
        start_date: DateLike,
        events: List[Event],
        days: Optional[int] = None,
    ) -> List[TimeBlockAnalysis]:
        """Analyze consecutive days starting at ``start_date``."""
        count = days if days is not None else self.config['days_to_analyze']
        first = as_date(start_date)
        return self.analyze_days([first + timedelta(days=i) for i in range(count)], events)

    def suggest_optimal_time(
        self,
        task_duration: int,
        priority: str,
        events: List[Event],
        start_date: DateLike,
        days_to_search: Optional[int] = None,
    ) -> Optional[tuple]:
        """First (date, block) that fits a task.

        High-priority work looks at recommended blocks before falling back
        to any free block of the same day.
        """
        count = days_to_search if days_to_search is not None else self.config['days_to_analyze']
        first = as_date(start_date)

        for offset in range(count):
            analysis = self.analyze(first + timedelta(days=offset), events)

            if priority == 'high':
                for block in analysis.recommended_blocks:
                    if block.duration >= task_duration:
                        return analysis.date, block

            for block in analysis.free_blocks:
                if block.duration >= task_duration:
                    return analysis.date, block

        logger.debug("no_block_found", task_duration=task_duration, days_searched=count)
        return None


def free_time_stats(analyses: List[TimeBlockAnalysis]) -> Dict[str, Any]:
    """Get statistics about free time patterns."""
    if not analyses:
        return {
            'total_days': 0,
            'total_free_time': 0,
            'average_free_time': 0,
            'total_deep_work_slots': 0,
            'average_deep_work_slots': 0.0,
            'most_free_day': None,
            'least_free_day': None,
        }

    total_days = len(analyses)
    total_free = sum(a.total_free_time for a in analyses)
    total_deep = sum(len(a.deep_work_slots) for a in analyses)

    # max/min keep the first day on ties
    most = max(analyses, key=lambda a: a.total_free_time)
    least = min(analyses, key=lambda a: a.total_free_time)

    return {
        'total_days': total_days,
        'total_free_time': total_free,
        'average_free_time': round(total_free / total_days),
        'total_deep_work_slots': total_deep,
        'average_deep_work_slots': round(total_deep / total_days, 1),
        'most_free_day': {'date': most.date, 'free_time': most.total_free_time},
        'least_free_day': {'date': least.date, 'free_time': least.total_free_time},
    }
