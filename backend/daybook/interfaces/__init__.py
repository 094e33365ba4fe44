"""Abstract interfaces for infrastructure abstraction."""

from daybook.interfaces.block_provider import IBlockProvider
from daybook.interfaces.completion_repository import ICompletionRepository
from daybook.interfaces.custom_event_repository import ICustomEventRepository
from daybook.interfaces.routine_override_repository import IRoutineOverrideRepository

__all__ = [
    "IBlockProvider",
    "IRoutineOverrideRepository",
    "ICustomEventRepository",
    "ICompletionRepository",
]
