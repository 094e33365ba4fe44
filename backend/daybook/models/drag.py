"""
Drag state machine models.

States: IDLE -> PENDING_DRAG -> DRAGGING(MOVE|RESIZE) -> IDLE.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from daybook.models.block import DayTimeline, ScheduleBlock
from daybook.models.enums import DragMode, DragPhase, ReleaseAction
from daybook.models.interval import TimeInterval


class PointerEvent(BaseModel):
    """Pointer position in timeline pixels.

    ``y`` is measured from the top of the timeline column; ``day_index`` is
    the day column under the pointer in multi-day views.
    """

    model_config = ConfigDict(frozen=True)

    pointer_id: int
    x: float
    y: float
    day_index: int = 0


class DragState(BaseModel):
    """Snapshot of the drag state machine."""

    model_config = ConfigDict(frozen=True)

    phase: DragPhase = DragPhase.IDLE
    mode: Optional[DragMode] = None
    block: Optional[ScheduleBlock] = None
    date: Optional[dt.date] = None
    pointer_id: Optional[int] = None
    origin_x: float = 0.0
    origin_y: float = 0.0
    original_interval: Optional[TimeInterval] = None
    current_interval: Optional[TimeInterval] = None
    has_moved: bool = False
    origin_day_index: int = 0
    current_day_index: int = 0

    @property
    def is_idle(self) -> bool:
        return self.phase == DragPhase.IDLE


class ReleaseOutcome(BaseModel):
    """What a pointer release resolved to."""

    action: ReleaseAction
    block: Optional[ScheduleBlock] = None
    interval: Optional[TimeInterval] = None
    date: Optional[dt.date] = None
    new_date: Optional[dt.date] = None


class DragResult(BaseModel):
    """Release outcome plus the reloaded day(s) after a commit."""

    outcome: ReleaseOutcome
    persisted: bool = False
    timelines: list[DayTimeline] = Field(default_factory=list)
