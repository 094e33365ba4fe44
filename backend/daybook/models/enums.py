"""
Enum definitions for the application.

These enums are used across models and provide type-safe kind/state values.
"""

from enum import Enum


class BlockKind(str, Enum):
    """
    Kind of a schedule block.

    FIXED = Immovable entry from an external schedule (game, imported event)
    FLEXIBLE = Routine entry whose default interval can be overridden per date
    CUSTOM = User-created freestanding event
    """

    FIXED = "FIXED"
    FLEXIBLE = "FLEXIBLE"
    CUSTOM = "CUSTOM"


class BlockSource(str, Enum):
    """Where a block came from."""

    ROUTINE = "routine"
    GAME = "game"
    CALENDAR = "calendar"
    CUSTOM = "custom"


class DragPhase(str, Enum):
    """State of the drag state machine."""

    IDLE = "IDLE"
    PENDING_DRAG = "PENDING_DRAG"
    DRAGGING = "DRAGGING"


class DragMode(str, Enum):
    """What a drag does to the block interval."""

    MOVE = "MOVE"
    RESIZE = "RESIZE"


class ReleaseAction(str, Enum):
    """What a pointer release resolved to."""

    NONE = "NONE"
    OPEN_EDITOR = "OPEN_EDITOR"
    CREATE = "CREATE"
    COMMIT = "COMMIT"
