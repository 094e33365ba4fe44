"""
Custom event repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate


class ICustomEventRepository(ABC):
    """Abstract interface for custom event persistence."""

    @abstractmethod
    async def create(self, user_id: str, data: CustomEventCreate) -> CustomEvent:
        """Create a new custom event."""
        pass

    @abstractmethod
    async def get(self, user_id: str, event_id: UUID) -> Optional[CustomEvent]:
        """Get a custom event by ID."""
        pass

    @abstractmethod
    async def list_for_date(self, user_id: str, target_date: date) -> list[CustomEvent]:
        """List custom events on a date ordered by start time."""
        pass

    @abstractmethod
    async def update(
        self, user_id: str, event_id: UUID, update: CustomEventUpdate
    ) -> CustomEvent:
        """Update a custom event. Raises NotFoundError if it does not exist."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, event_id: UUID) -> bool:
        """Delete a custom event."""
        pass
