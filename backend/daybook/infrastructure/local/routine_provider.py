"""
Default routine generator.

Produces the FLEXIBLE routine blocks for a date. The wake-up time is
progressive: 06:30 in week 1, 30 minutes earlier each week, never before
05:00. The week-1 anchor is injected rather than read from global state.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from daybook.interfaces.block_provider import IBlockProvider
from daybook.models.block import ScheduleBlock
from daybook.models.enums import BlockKind, BlockSource
from daybook.models.interval import MINUTES_PER_DAY, TimeInterval, add_minutes, format_time, parse_time
from daybook.models.routine import ProgressiveSchedule, RoutineItem

WAKE_UP_START_MINUTES = 6 * 60 + 30
WAKE_UP_FLOOR_MINUTES = 5 * 60
WAKE_UP_STEP_MINUTES = 30
WAKE_UP_WEEKS = 4


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def wake_up_time(week: int) -> str:
    """Wake-up time for a plan week (1-based)."""
    steps = min(max(week, 1), WAKE_UP_WEEKS) - 1
    total = WAKE_UP_START_MINUTES - steps * WAKE_UP_STEP_MINUTES
    return format_time(max(total, WAKE_UP_FLOOR_MINUTES))


def default_routine(week: int) -> list[RoutineItem]:
    wake = wake_up_time(week)
    return [
        RoutineItem(
            id="wake-up",
            name="Wake Up",
            time=wake,
            end_time=add_minutes(wake, 15),
            progressive=ProgressiveSchedule(
                start_time="06:30", end_time="05:00", weeks=WAKE_UP_WEEKS
            ),
        ),
        RoutineItem(
            id="lunch", name="Lunch Break", time="13:00", end_time="14:00", weekdays_only=True
        ),
        RoutineItem(id="peloton", name="Peloton Workout", time="17:30", end_time="18:15"),
        RoutineItem(id="dinner", name="Dinner", time="18:15", end_time="19:00"),
        RoutineItem(id="wash-face", name="Wash Face & Brush Teeth", time="21:00", end_time="21:15"),
        RoutineItem(id="reading", name="Reading Before Bed", time="21:15", end_time="21:30"),
        RoutineItem(id="lights-out", name="Lights Out", time="21:30", end_time="21:45"),
    ]


class DefaultRoutineProvider(IBlockProvider):
    """Routine generator exposed as a FLEXIBLE block provider."""

    def __init__(
        self,
        week1_start: Optional[date] = None,
        default_item_minutes: int = 15,
    ):
        self.week1_start = monday_of(week1_start or date.today())
        self.default_item_minutes = default_item_minutes

    def current_week(self, target_date: date) -> int:
        weeks = (target_date - self.week1_start).days // 7
        return max(weeks + 1, 1)

    def routine_for_date(self, target_date: date) -> list[RoutineItem]:
        routine = default_routine(self.current_week(target_date))
        if not is_weekday(target_date):
            return [item for item in routine if not item.weekdays_only]
        return routine

    def to_block(self, item: RoutineItem, target_date: date) -> ScheduleBlock:
        if item.end_time:
            interval = TimeInterval.from_strings(item.time, item.end_time)
        else:
            start = parse_time(item.time)
            interval = TimeInterval(
                start_minute=start,
                end_minute=min(start + self.default_item_minutes, MINUTES_PER_DAY),
            )
        return ScheduleBlock(
            id=item.id,
            label=item.name,
            interval=interval,
            kind=BlockKind.FLEXIBLE,
            date=target_date,
            source=BlockSource.ROUTINE,
            routine_id=item.id,
            has_explicit_end=item.end_time is not None,
        )

    async def blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        return [self.to_block(item, target_date) for item in self.routine_for_date(target_date)]
