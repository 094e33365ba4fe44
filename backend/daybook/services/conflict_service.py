"""
Conflict detection between fixed events and flexible routine items.

Handles overlap checks and resolution suggestions.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from daybook.core.config import Settings, get_settings
from daybook.core.logger import setup_logger
from daybook.models.block import Conflict, ScheduleBlock
from daybook.models.interval import MINUTES_PER_DAY, TimeInterval, format_time, parse_time

logger = setup_logger(__name__)


class ConflictDetector:
    """
    Finds (fixed, flexible) overlaps and proposes where to move the flexible item.

    Suggestion order:
    - before the fixed event with a buffer, if it starts no earlier than ``earliest_start``
    - after the fixed event with a buffer, if it ends no later than ``latest_end``
    - a generic morning move for workout routines
    - a generic "adjust around" message
    """

    def __init__(
        self,
        default_flexible_minutes: int = 15,
        buffer_minutes: int = 15,
        earliest_start: int = 6 * 60,
        latest_end: int = 23 * 60,
        workout_ids: Iterable[str] = ("workout", "peloton"),
    ):
        self.default_flexible_minutes = default_flexible_minutes
        self.buffer_minutes = buffer_minutes
        self.earliest_start = earliest_start
        self.latest_end = latest_end
        self.workout_ids = frozenset(workout_ids)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ConflictDetector":
        settings = settings or get_settings()
        return cls(
            default_flexible_minutes=settings.DEFAULT_FLEXIBLE_MINUTES,
            buffer_minutes=settings.CONFLICT_BUFFER_MINUTES,
            earliest_start=parse_time(settings.SUGGESTION_EARLIEST),
            latest_end=parse_time(settings.SUGGESTION_LATEST_END, allow_end_of_day=True),
            workout_ids=settings.WORKOUT_ROUTINE_IDS,
        )

    def effective_interval(self, item: ScheduleBlock) -> TimeInterval:
        """Interval used for conflict checks; items without an end count as a short block."""
        if item.has_explicit_end:
            return item.interval
        start = item.interval.start_minute
        return TimeInterval(
            start_minute=start,
            end_minute=min(start + self.default_flexible_minutes, MINUTES_PER_DAY),
        )

    def detect_conflicts(
        self,
        fixed_blocks: Sequence[ScheduleBlock],
        flexible_blocks: Sequence[ScheduleBlock],
        on_date: Optional[date] = None,
    ) -> list[Conflict]:
        conflicts: list[Conflict] = []
        for fixed in fixed_blocks:
            for item in flexible_blocks:
                if not fixed.interval.overlaps(self.effective_interval(item)):
                    continue
                conflicts.append(
                    Conflict(
                        fixed_event=fixed,
                        flexible_item=item,
                        suggestion=self.suggest(fixed, item),
                        date=on_date,
                    )
                )

        if conflicts:
            logger.info(
                f"Found {len(conflicts)} conflict(s)"
                + (f" on {on_date.isoformat()}" if on_date else "")
            )
        return conflicts

    def suggest(self, fixed: ScheduleBlock, item: ScheduleBlock) -> str:
        """Human-friendly suggestion; always returns a message."""
        interval = self.effective_interval(item)
        duration = interval.duration
        fixed_start = fixed.interval.start_minute
        fixed_end = fixed.interval.end_minute

        before_start = fixed_start - duration - self.buffer_minutes
        if before_start >= self.earliest_start:
            return (
                f'Move "{item.label}" to {format_time(before_start)}-'
                f"{format_time(before_start + duration)} (before {fixed.label})"
            )

        after_start = fixed_end + self.buffer_minutes
        if after_start + duration <= self.latest_end:
            return (
                f'Move "{item.label}" to {format_time(after_start)}-'
                f"{format_time(after_start + duration)} (after {fixed.label})"
            )

        if item.routine_id in self.workout_ids or item.id in self.workout_ids:
            return f'Move "{item.label}" to the morning (before {fixed.label})'

        return f'Adjust "{item.label}" around {fixed.label} ({fixed.interval})'
