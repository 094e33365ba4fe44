"""
Fixed event feed models.

Games and external calendar events arrive as HH:MM ranges for a date and are
shown as FIXED blocks.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from daybook.models.interval import TimeInterval


class FixedEventCreate(BaseModel):
    """A game or other immovable event."""

    id: Optional[str] = Field(None, description="Feed id; generated when omitted")
    label: str = Field(..., min_length=1, max_length=500)
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")

    def to_interval(self) -> TimeInterval:
        return TimeInterval.from_strings(self.start_time, self.end_time)


class CalendarEventImport(BaseModel):
    """An event pulled from an external calendar."""

    id: str
    summary: str
    start: str = Field(..., description="HH:MM")
    end: str = Field(..., description="HH:MM")
    tag: Optional[str] = Field(None, description="Set on events exported by Daybook")

    def to_interval(self) -> TimeInterval:
        return TimeInterval.from_strings(self.start, self.end)


class CalendarImportResult(BaseModel):
    imported: int
    skipped: int
