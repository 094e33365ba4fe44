"""
SQLite implementation of custom event repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from daybook.core.exceptions import NotFoundError
from daybook.infrastructure.local.database import CustomEventORM, get_session_factory
from daybook.interfaces.custom_event_repository import ICustomEventRepository
from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate


class SqliteCustomEventRepository(ICustomEventRepository):
    """SQLite implementation of custom event repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: CustomEventORM) -> CustomEvent:
        """Convert ORM object to Pydantic model."""
        return CustomEvent.model_validate(orm, from_attributes=True)

    async def _find(self, session, user_id: str, event_id: UUID):
        result = await session.execute(
            select(CustomEventORM).where(
                and_(
                    CustomEventORM.id == str(event_id),
                    CustomEventORM.user_id == user_id,
                )
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, data: CustomEventCreate) -> CustomEvent:
        """Create a new custom event."""
        async with self._session_factory() as session:
            orm = CustomEventORM(
                id=str(uuid4()),
                user_id=user_id,
                name=data.name,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, event_id: UUID) -> Optional[CustomEvent]:
        """Get a custom event by ID."""
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, event_id)
            return self._orm_to_model(orm) if orm else None

    async def list_for_date(self, user_id: str, target_date: date) -> list[CustomEvent]:
        """List custom events on a date ordered by start time."""
        async with self._session_factory() as session:
            query = (
                select(CustomEventORM)
                .where(
                    and_(
                        CustomEventORM.user_id == user_id,
                        CustomEventORM.date == target_date,
                    )
                )
                .order_by(CustomEventORM.start_time.asc())
            )
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(
        self, user_id: str, event_id: UUID, update: CustomEventUpdate
    ) -> CustomEvent:
        """Update a custom event."""
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, event_id)
            if not orm:
                raise NotFoundError(f"CustomEvent {event_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None:
                    continue
                setattr(orm, field, value)

            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, event_id: UUID) -> bool:
        """Delete a custom event."""
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, event_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
