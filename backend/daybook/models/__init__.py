"""Pydantic models (schemas) for the application."""

from daybook.models.enums import (
    BlockKind,
    BlockSource,
    DragMode,
    DragPhase,
    ReleaseAction,
)
from daybook.models.interval import TimeInterval
from daybook.models.block import ColumnAssignment, Conflict, DayTimeline, ScheduleBlock
from daybook.models.routine import (
    RoutineCompletion,
    RoutineItem,
    RoutineOverride,
    RoutineOverrideSet,
    Streak,
)
from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate
from daybook.models.drag import DragResult, DragState, PointerEvent, ReleaseOutcome
from daybook.models.fixed_event import CalendarEventImport, CalendarImportResult, FixedEventCreate

__all__ = [
    # Enums
    "BlockKind",
    "BlockSource",
    "DragMode",
    "DragPhase",
    "ReleaseAction",
    # Timeline
    "TimeInterval",
    "ScheduleBlock",
    "ColumnAssignment",
    "Conflict",
    "DayTimeline",
    # Routines
    "RoutineItem",
    "RoutineOverride",
    "RoutineOverrideSet",
    "RoutineCompletion",
    "Streak",
    # Custom events
    "CustomEvent",
    "CustomEventCreate",
    "CustomEventUpdate",
    # Drag
    "PointerEvent",
    "DragState",
    "ReleaseOutcome",
    "DragResult",
    # Fixed event feeds
    "FixedEventCreate",
    "CalendarEventImport",
    "CalendarImportResult",
]
