"""
Minute-of-day interval model.

Every component compares intervals through ``TimeInterval.overlaps`` so that
adjacent blocks (end of A == start of B) never count as conflicting.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

from daybook.core.exceptions import InvalidIntervalError, InvalidTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str, allow_end_of_day: bool = False) -> int:
    """Parse ``HH:MM`` into minutes since midnight.

    ``24:00`` is only accepted when ``allow_end_of_day`` is set, since it can
    only be the end of an interval.
    """
    if not isinstance(value, str):
        raise InvalidTimeError(value)
    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidTimeError(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if allow_end_of_day and hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(value)
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM`` (``24:00`` for end of day)."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise InvalidTimeError(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_12h(value: str) -> str:
    """``"13:05"`` -> ``"1:05 PM"``; the end-of-day ``"24:00"`` reads as ``"12:00 AM"``."""
    total = parse_time(value, allow_end_of_day=True) % MINUTES_PER_DAY
    hours, minutes = divmod(total, 60)
    period = "PM" if hours >= 12 else "AM"
    hour12 = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{hour12}:{minutes:02d} {period}"


def add_minutes(value: str, minutes: int) -> str:
    """Shift an ``HH:MM`` string, clamped to the day."""
    total = parse_time(value, allow_end_of_day=True) + minutes
    return format_time(max(0, min(MINUTES_PER_DAY, total)))


class TimeInterval(BaseModel):
    """Half-open minute-of-day interval ``[start_minute, end_minute)``."""

    model_config = ConfigDict(frozen=True)

    start_minute: int
    end_minute: int

    @model_validator(mode="after")
    def check_bounds(self) -> "TimeInterval":
        if not 0 <= self.start_minute < MINUTES_PER_DAY:
            raise InvalidIntervalError(self.start_minute, self.end_minute, "start out of range")
        if not 0 < self.end_minute <= MINUTES_PER_DAY:
            raise InvalidIntervalError(self.start_minute, self.end_minute, "end out of range")
        if self.start_minute >= self.end_minute:
            raise InvalidIntervalError(self.start_minute, self.end_minute, "start must be before end")
        return self

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeInterval":
        return cls(
            start_minute=parse_time(start),
            end_minute=parse_time(end, allow_end_of_day=True),
        )

    @classmethod
    def from_duration(cls, start_minute: int, duration: int) -> "TimeInterval":
        return cls(start_minute=start_minute, end_minute=start_minute + duration)

    @computed_field
    @property
    def start_time(self) -> str:
        return format_time(self.start_minute)

    @computed_field
    @property
    def end_time(self) -> str:
        return format_time(self.end_minute)

    @property
    def duration(self) -> int:
        return self.end_minute - self.start_minute

    def overlaps(self, other: "TimeInterval") -> bool:
        # Touching endpoints do not overlap.
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Overlap predicate shared by layout, conflicts and drag."""
    return a.overlaps(b)
