"""
Schedule block models.

Blocks are rebuilt fresh per date; only custom events and routine overrides
persist across loads.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from daybook.models.enums import BlockKind, BlockSource
from daybook.models.interval import TimeInterval, format_time_12h


def is_editable(kind: BlockKind) -> bool:
    """Fixed blocks are never editable; flexible and custom blocks always are."""
    if kind == BlockKind.FIXED:
        return False
    if kind == BlockKind.FLEXIBLE:
        return True
    if kind == BlockKind.CUSTOM:
        return True
    raise ValueError(f"Unknown block kind: {kind!r}")


class ScheduleBlock(BaseModel):
    """One time block on a date."""

    id: str
    label: str
    interval: TimeInterval
    kind: BlockKind
    date: dt.date
    source: BlockSource
    routine_id: Optional[str] = Field(None, description="Routine item id, FLEXIBLE only")
    completed: bool = False
    has_explicit_end: bool = True

    @computed_field
    @property
    def editable(self) -> bool:
        return is_editable(self.kind)

    @computed_field
    @property
    def time_label(self) -> str:
        """Display range, e.g. ``"9:00 AM - 10:00 AM"``."""
        return (
            f"{format_time_12h(self.interval.start_time)} - "
            f"{format_time_12h(self.interval.end_time)}"
        )


class ColumnAssignment(BaseModel):
    """Rendering column of a block within its overlap cluster."""

    block_id: str
    column: int = Field(..., ge=0)
    total_columns: int = Field(..., ge=1)


class Conflict(BaseModel):
    """Overlap between a fixed event and a flexible routine item."""

    fixed_event: ScheduleBlock
    flexible_item: ScheduleBlock
    suggestion: str
    date: Optional[dt.date] = None


class DayTimeline(BaseModel):
    """Blocks of one date with their column layout."""

    date: dt.date
    blocks: list[ScheduleBlock] = Field(default_factory=list)
    layout: list[ColumnAssignment] = Field(default_factory=list)
