"""
Drag controller for moving, resizing and creating timeline blocks.

The state machine is a set of pure transition functions over ``DragState``
(IDLE -> PENDING_DRAG -> DRAGGING(MOVE|RESIZE) -> IDLE) so it can be driven
and tested without a rendering harness. ``DragController`` wraps it for one
user session and persists commits through ``TimelineService``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from daybook.core.config import Settings, get_settings
from daybook.core.exceptions import DragRejectedError
from daybook.core.logger import setup_logger
from daybook.models.block import ScheduleBlock
from daybook.models.custom_event import CustomEventUpdate
from daybook.models.drag import DragResult, DragState, PointerEvent, ReleaseOutcome
from daybook.models.enums import BlockKind, DragMode, DragPhase, ReleaseAction
from daybook.models.interval import MINUTES_PER_DAY, TimeInterval
from daybook.services.timeline_service import TimelineService

logger = setup_logger(__name__)


@dataclass(frozen=True)
class DragConfig:
    """Timeline geometry and grid settings."""

    px_per_minute: float = 1.8
    snap_minutes: int = 5
    threshold_px: float = 5.0
    min_block_minutes: int = 5
    default_new_block_minutes: int = 60
    # Minute shown at y=0 of the timeline column
    day_start_minute: int = 0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DragConfig":
        settings = settings or get_settings()
        return cls(
            px_per_minute=settings.PX_PER_MINUTE,
            snap_minutes=settings.SNAP_MINUTES,
            threshold_px=settings.DRAG_THRESHOLD_PX,
            min_block_minutes=settings.MIN_BLOCK_MINUTES,
            default_new_block_minutes=settings.DEFAULT_NEW_BLOCK_MINUTES,
        )


def snap(minutes: float, step: int) -> int:
    """Round to the nearest grid step, halves rounding up."""
    return int(math.floor(minutes / step + 0.5)) * step


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def moved_interval(original: TimeInterval, delta_px: float, config: DragConfig) -> TimeInterval:
    """Shift keeping the duration; start snapped and clamped to the day."""
    duration = original.duration
    start = snap(original.start_minute + delta_px / config.px_per_minute, config.snap_minutes)
    start = clamp(start, 0, MINUTES_PER_DAY - duration)
    return TimeInterval(start_minute=start, end_minute=start + duration)


def resized_interval(original: TimeInterval, delta_px: float, config: DragConfig) -> TimeInterval:
    """Move only the end; never shorter than ``min_block_minutes``."""
    end = snap(original.end_minute + delta_px / config.px_per_minute, config.snap_minutes)
    low = min(original.start_minute + config.min_block_minutes, MINUTES_PER_DAY)
    end = clamp(end, low, MINUTES_PER_DAY)
    return TimeInterval(start_minute=original.start_minute, end_minute=end)


def new_block_interval(y: float, config: DragConfig) -> TimeInterval:
    """Proposed interval for a click on empty timeline space."""
    minute = config.day_start_minute + y / config.px_per_minute
    start = int(math.floor(minute / config.snap_minutes)) * config.snap_minutes
    start = clamp(start, 0, MINUTES_PER_DAY - config.min_block_minutes)
    end = min(start + config.default_new_block_minutes, MINUTES_PER_DAY)
    return TimeInterval(start_minute=start, end_minute=end)


# ===========================================
# Transitions
# ===========================================


def pointer_down(
    state: DragState,
    event: PointerEvent,
    block: Optional[ScheduleBlock],
    on_date: date,
    mode: DragMode = DragMode.MOVE,
) -> DragState:
    """IDLE -> PENDING_DRAG. ``block`` is None for empty timeline space."""
    if not state.is_idle:
        return state
    if block is not None and not block.editable:
        raise DragRejectedError(
            f"Block {block.id} is not editable", details={"kind": block.kind.value}
        )
    return DragState(
        phase=DragPhase.PENDING_DRAG,
        mode=mode if block is not None else None,
        block=block,
        date=on_date,
        pointer_id=event.pointer_id,
        origin_x=event.x,
        origin_y=event.y,
        original_interval=block.interval if block is not None else None,
        current_interval=block.interval if block is not None else None,
        origin_day_index=event.day_index,
        current_day_index=event.day_index,
    )


def pointer_move(state: DragState, event: PointerEvent, config: DragConfig) -> DragState:
    """PENDING_DRAG -> DRAGGING once movement exceeds the threshold."""
    if state.is_idle or event.pointer_id != state.pointer_id:
        return state

    dx = event.x - state.origin_x
    dy = event.y - state.origin_y
    has_moved = state.has_moved or math.hypot(dx, dy) > config.threshold_px
    if not has_moved:
        return state

    if state.block is None or state.original_interval is None:
        return state.model_copy(update={"phase": DragPhase.DRAGGING, "has_moved": True})

    if state.mode == DragMode.RESIZE:
        interval = resized_interval(state.original_interval, dy, config)
        day_index = state.origin_day_index
    else:
        interval = moved_interval(state.original_interval, dy, config)
        day_index = event.day_index

    return state.model_copy(
        update={
            "phase": DragPhase.DRAGGING,
            "has_moved": True,
            "current_interval": interval,
            "current_day_index": day_index,
        }
    )


def pointer_up(
    state: DragState, event: PointerEvent, config: DragConfig
) -> tuple[DragState, ReleaseOutcome]:
    """Any -> IDLE, resolving the interaction to a click, create or commit."""
    if state.is_idle or event.pointer_id != state.pointer_id:
        return state, ReleaseOutcome(action=ReleaseAction.NONE)

    state = pointer_move(state, event, config)
    idle = DragState()

    if not state.has_moved:
        if state.block is not None:
            return idle, ReleaseOutcome(
                action=ReleaseAction.OPEN_EDITOR,
                block=state.block,
                interval=state.block.interval,
                date=state.date,
            )
        return idle, ReleaseOutcome(
            action=ReleaseAction.CREATE,
            interval=new_block_interval(state.origin_y, config),
            date=state.date,
        )

    if state.block is None or state.current_interval is None:
        return idle, ReleaseOutcome(action=ReleaseAction.NONE, date=state.date)

    new_date = None
    day_offset = state.current_day_index - state.origin_day_index
    if day_offset and state.block.kind == BlockKind.CUSTOM and state.date is not None:
        new_date = state.date + timedelta(days=day_offset)

    if state.current_interval == state.original_interval and new_date is None:
        return idle, ReleaseOutcome(action=ReleaseAction.NONE, block=state.block, date=state.date)

    return idle, ReleaseOutcome(
        action=ReleaseAction.COMMIT,
        block=state.block,
        interval=state.current_interval,
        date=state.date,
        new_date=new_date,
    )


def cancel(state: DragState) -> DragState:
    return DragState()


# ===========================================
# Controller
# ===========================================


class DragController:
    """Drives the drag state machine for one user and persists commits."""

    def __init__(
        self,
        timeline_service: TimelineService,
        user_id: str,
        config: Optional[DragConfig] = None,
    ):
        self.timeline_service = timeline_service
        self.user_id = user_id
        self.config = config or DragConfig.from_settings()
        self.state = DragState()

    def on_pointer_down(
        self,
        event: PointerEvent,
        block: Optional[ScheduleBlock],
        on_date: date,
        mode: DragMode = DragMode.MOVE,
    ) -> DragState:
        self.state = pointer_down(self.state, event, block, on_date, mode)
        return self.state

    def on_pointer_move(self, event: PointerEvent) -> Optional[TimeInterval]:
        """In-progress interval for re-rendering."""
        self.state = pointer_move(self.state, event, self.config)
        return self.state.current_interval

    async def on_pointer_up(self, event: PointerEvent) -> DragResult:
        self.state, outcome = pointer_up(self.state, event, self.config)
        if outcome.action != ReleaseAction.COMMIT:
            return DragResult(outcome=outcome)

        persisted = await self._persist(outcome)
        timelines = []
        for target_date in dict.fromkeys(d for d in (outcome.date, outcome.new_date) if d):
            timelines.append(await self.timeline_service.load_day(self.user_id, target_date))
        return DragResult(outcome=outcome, persisted=persisted, timelines=timelines)

    def cancel(self) -> DragState:
        self.state = cancel(self.state)
        return self.state

    async def _persist(self, outcome: ReleaseOutcome) -> bool:
        """Write the committed interval; failures are logged and left to the reload."""
        block = outcome.block
        interval = outcome.interval
        try:
            if block.kind == BlockKind.CUSTOM:
                await self.timeline_service.update_custom_event(
                    self.user_id,
                    UUID(block.id),
                    CustomEventUpdate(
                        start_time=interval.start_time,
                        end_time=interval.end_time,
                        date=outcome.new_date,
                    ),
                )
            elif block.kind == BlockKind.FLEXIBLE:
                await self.timeline_service.set_override(
                    self.user_id, block.routine_id, outcome.date, interval
                )
            elif block.kind == BlockKind.FIXED:
                raise DragRejectedError(f"Block {block.id} is not editable")
            else:
                raise ValueError(f"Unknown block kind: {block.kind!r}")
        except Exception as e:
            logger.error(f"Failed to persist drag of {block.id} to {interval}: {e}")
            return False

        logger.info(f"Moved {block.kind.value} block {block.id} to {interval}")
        return True
