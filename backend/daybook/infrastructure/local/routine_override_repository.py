"""
SQLite implementation of routine override repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, select

from daybook.infrastructure.local.database import RoutineOverrideORM, get_session_factory
from daybook.interfaces.routine_override_repository import IRoutineOverrideRepository
from daybook.models.interval import TimeInterval
from daybook.models.routine import RoutineOverride


class SqliteRoutineOverrideRepository(IRoutineOverrideRepository):
    """SQLite implementation of routine override repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: RoutineOverrideORM) -> RoutineOverride:
        """Convert ORM object to Pydantic model."""
        interval = None
        if not orm.skipped and orm.start_time and orm.end_time:
            interval = TimeInterval.from_strings(orm.start_time, orm.end_time)
        return RoutineOverride(
            routine_id=orm.routine_id,
            date=orm.date,
            interval=interval,
            skipped=bool(orm.skipped),
        )

    async def _find(self, session, user_id: str, routine_id: str, target_date: date):
        result = await session.execute(
            select(RoutineOverrideORM).where(
                and_(
                    RoutineOverrideORM.user_id == user_id,
                    RoutineOverrideORM.routine_id == routine_id,
                    RoutineOverrideORM.date == target_date,
                )
            )
        )
        return result.scalar_one_or_none()

    async def _upsert(
        self,
        user_id: str,
        routine_id: str,
        target_date: date,
        interval: Optional[TimeInterval],
        skipped: bool,
    ) -> RoutineOverride:
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, routine_id, target_date)
            if not orm:
                orm = RoutineOverrideORM(
                    user_id=user_id,
                    routine_id=routine_id,
                    date=target_date,
                )
                session.add(orm)
            orm.start_time = interval.start_time if interval else None
            orm.end_time = interval.end_time if interval else None
            orm.skipped = skipped
            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(
        self, user_id: str, routine_id: str, target_date: date
    ) -> Optional[RoutineOverride]:
        """Get the override or skip for a routine on a date."""
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, routine_id, target_date)
            return self._orm_to_model(orm) if orm else None

    async def list_for_date(self, user_id: str, target_date: date) -> list[RoutineOverride]:
        """List all overrides and skips on a date."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoutineOverrideORM).where(
                    and_(
                        RoutineOverrideORM.user_id == user_id,
                        RoutineOverrideORM.date == target_date,
                    )
                )
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def set(
        self, user_id: str, routine_id: str, target_date: date, interval: TimeInterval
    ) -> RoutineOverride:
        """Upsert a replacement interval."""
        return await self._upsert(user_id, routine_id, target_date, interval, skipped=False)

    async def skip(self, user_id: str, routine_id: str, target_date: date) -> RoutineOverride:
        """Mark the routine absent on the date."""
        return await self._upsert(user_id, routine_id, target_date, None, skipped=True)

    async def remove(self, user_id: str, routine_id: str, target_date: date) -> bool:
        """Remove the override or skip."""
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, routine_id, target_date)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
