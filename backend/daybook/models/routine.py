"""
Routine models.

Defines routine items, per-date overrides/skips, completions and streaks.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from daybook.core.exceptions import InvalidTimeError
from daybook.models.interval import TimeInterval, parse_time


class ProgressiveSchedule(BaseModel):
    """Start time that moves from ``start_time`` to ``end_time`` over ``weeks``."""

    start_time: str
    end_time: str
    weeks: int = Field(..., ge=1)


class RoutineItem(BaseModel):
    """Entry produced by the routine generator."""

    id: str
    name: str
    time: str = Field(..., description="HH:MM")
    end_time: Optional[str] = Field(None, description="HH:MM, None = no explicit end")
    weekdays_only: bool = False
    progressive: Optional[ProgressiveSchedule] = None


class RoutineOverride(BaseModel):
    """Per-date replacement interval (or skip) for a routine item."""

    routine_id: str
    date: dt.date
    interval: Optional[TimeInterval] = None
    skipped: bool = False

    @property
    def is_skipped(self) -> bool:
        return self.skipped


class RoutineOverrideSet(BaseModel):
    """Request body for setting an override."""

    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        try:
            parse_time(value, allow_end_of_day=True)
        except InvalidTimeError as exc:
            raise ValueError(exc.message) from exc
        return value

    def to_interval(self) -> TimeInterval:
        return TimeInterval.from_strings(self.start_time, self.end_time)


class RoutineCompletion(BaseModel):
    """Completion flag of a routine item on a date."""

    routine_id: str
    date: dt.date
    completed: bool


class Streak(BaseModel):
    """Consecutive-completion run of a routine item."""

    routine_id: str
    current: int = Field(0, ge=0)
    best: int = Field(0, ge=0)
    last_completed_date: Optional[dt.date] = None
