"""
Custom event models.

Custom events are freestanding, user-owned blocks stored with HH:MM times.
"""

from __future__ import annotations

import datetime as dt
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from daybook.core.exceptions import InvalidTimeError
from daybook.models.interval import TimeInterval, format_time, parse_time


def _validate_hhmm(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        minutes = parse_time(value, allow_end_of_day=True)
    except InvalidTimeError as exc:
        raise ValueError(exc.message) from exc
    return format_time(minutes)


class CustomEventBase(BaseModel):
    """Base fields for custom events."""

    name: str = Field(..., min_length=1, max_length=500)
    date: dt.date
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _validate_hhmm(value)

    def to_interval(self) -> TimeInterval:
        return TimeInterval.from_strings(self.start_time, self.end_time)


class CustomEventCreate(CustomEventBase):
    """Create a new custom event."""

    pass


class CustomEventUpdate(BaseModel):
    """Update custom event fields."""

    name: Optional[str] = Field(None, min_length=1, max_length=500)
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: Optional[str]) -> Optional[str]:
        return _validate_hhmm(value)


class CustomEvent(CustomEventBase):
    """Custom event with metadata."""

    id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
