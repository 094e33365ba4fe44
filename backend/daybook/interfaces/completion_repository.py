"""
Routine completion repository interface.

Stores completion flags per (routine, date) and the last computed streak per
routine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from daybook.models.routine import RoutineCompletion, Streak


class ICompletionRepository(ABC):
    """Abstract interface for completion and streak persistence."""

    @abstractmethod
    async def toggle(self, user_id: str, routine_id: str, target_date: date) -> RoutineCompletion:
        """Flip the completion flag, creating it as completed if missing."""
        pass

    @abstractmethod
    async def is_completed(self, user_id: str, routine_id: str, target_date: date) -> bool:
        """Check whether a routine was completed on a date."""
        pass

    @abstractmethod
    async def completed_dates(self, user_id: str, routine_id: str) -> list[date]:
        """Completed dates of a routine, most recent first."""
        pass

    @abstractmethod
    async def completed_routine_ids(self, user_id: str, target_date: date) -> set[str]:
        """Routine ids completed on a date."""
        pass

    @abstractmethod
    async def get_streak(self, user_id: str, routine_id: str) -> Optional[Streak]:
        """Get the stored streak of a routine."""
        pass

    @abstractmethod
    async def save_streak(self, user_id: str, streak: Streak) -> Streak:
        """Upsert the streak of a routine."""
        pass
