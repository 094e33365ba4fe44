"""
Block provider interface.

Routine, game, external calendar and custom-event sources all yield
``ScheduleBlock`` lists for a date through this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from daybook.models.block import ScheduleBlock


class IBlockProvider(ABC):
    """Abstract interface for a source of schedule blocks."""

    @abstractmethod
    async def blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        """Get the blocks this source contributes to a date."""
        pass
