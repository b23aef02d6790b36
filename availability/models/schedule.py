"""Schedule suggestion models produced by the optimizer."""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Dict, List

from .task import Task


@dataclass
class SlotCandidate:
    """A scored placement of a task inside a free block."""

    start: datetime
    end: datetime
    date: date
    score: float
    reasoning: List[str] = field(default_factory=list)


@dataclass
class ScheduleSuggestion:
    """Chosen slot for a task plus up to three runner-ups."""

    task: Task
    suggested_slot: SlotCandidate
    alternative_slots: List[SlotCandidate] = field(default_factory=list)


@dataclass
class ScheduleSummary:
    """Aggregate figures for one optimization run."""

    tasks_scheduled: int
    tasks_unscheduled: int
    average_score: int
    focus_time_protected: bool


@dataclass
class OptimizedSchedule:
    """Complete result of an optimization run."""

    suggestions: List[ScheduleSuggestion]
    conflicts: List[str]  # reasons for tasks that could not be placed
    summary: ScheduleSummary

    def to_dict(self) -> Dict[str, Any]:
        """Convert schedule to dictionary for JSON export."""
        return asdict(self)

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            "=== Optimized Schedule ===",
            "",
            "Suggestions:",
        ]

        for suggestion in self.suggestions:
            slot = suggestion.suggested_slot
            lines.append(
                f"  {suggestion.task.title} -> {slot.start:%Y-%m-%d %H:%M}-{slot.end:%H:%M}"
                f" (score {slot.score:.0f})"
            )
            for reason in slot.reasoning:
                lines.append(f"    - {reason}")

        if self.conflicts:
            lines.extend(["", "Unscheduled:"])
            for reason in self.conflicts:
                lines.append(f"  {reason}")

        lines.extend([
            "",
            "Summary:",
            f"  tasks_scheduled: {self.summary.tasks_scheduled}",
            f"  tasks_unscheduled: {self.summary.tasks_unscheduled}",
            f"  average_score: {self.summary.average_score}",
            f"  focus_time_protected: {self.summary.focus_time_protected}",
        ])
        lines.append("=" * 50)

        return "\n".join(lines)


@dataclass
class RebalanceRecommendation:
    """Suggested move of an existing event to a better slot."""

    event_id: str
    current_start: datetime
    current_end: datetime
    better_slot: SlotCandidate


@dataclass
class RebalanceResult:
    """Recommendations from a rebalance pass."""

    recommendations: List[RebalanceRecommendation]
    total_events: int
    events_to_move: int
    average_improvement: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
