"""
Routine override repository interface.

Overrides and skips share the ``(routine_id, date)`` key space; at most one
entry exists per key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from daybook.models.interval import TimeInterval
from daybook.models.routine import RoutineOverride


class IRoutineOverrideRepository(ABC):
    """Abstract interface for routine override persistence."""

    @abstractmethod
    async def get(
        self, user_id: str, routine_id: str, target_date: date
    ) -> Optional[RoutineOverride]:
        """Get the override or skip for a routine on a date."""
        pass

    @abstractmethod
    async def list_for_date(self, user_id: str, target_date: date) -> list[RoutineOverride]:
        """List all overrides and skips on a date."""
        pass

    @abstractmethod
    async def set(
        self, user_id: str, routine_id: str, target_date: date, interval: TimeInterval
    ) -> RoutineOverride:
        """Upsert a replacement interval. Replaces a skip on the same key."""
        pass

    @abstractmethod
    async def skip(self, user_id: str, routine_id: str, target_date: date) -> RoutineOverride:
        """Mark the routine absent on the date. Replaces an override on the same key."""
        pass

    @abstractmethod
    async def remove(self, user_id: str, routine_id: str, target_date: date) -> bool:
        """Remove the override or skip, restoring the default interval."""
        pass
