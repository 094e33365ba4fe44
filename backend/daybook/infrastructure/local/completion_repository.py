"""
SQLite implementation of completion repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, select

from daybook.infrastructure.local.database import (
    RoutineCompletionORM,
    RoutineStreakORM,
    get_session_factory,
)
from daybook.interfaces.completion_repository import ICompletionRepository
from daybook.models.routine import RoutineCompletion, Streak


class SqliteCompletionRepository(ICompletionRepository):
    """SQLite implementation of completion and streak persistence."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def _find_completion(self, session, user_id: str, routine_id: str, target_date: date):
        result = await session.execute(
            select(RoutineCompletionORM).where(
                and_(
                    RoutineCompletionORM.user_id == user_id,
                    RoutineCompletionORM.routine_id == routine_id,
                    RoutineCompletionORM.date == target_date,
                )
            )
        )
        return result.scalar_one_or_none()

    async def toggle(self, user_id: str, routine_id: str, target_date: date) -> RoutineCompletion:
        """Flip the completion flag, creating it as completed if missing."""
        async with self._session_factory() as session:
            orm = await self._find_completion(session, user_id, routine_id, target_date)
            if orm:
                orm.completed = not orm.completed
                orm.updated_at = datetime.utcnow()
            else:
                orm = RoutineCompletionORM(
                    user_id=user_id,
                    routine_id=routine_id,
                    date=target_date,
                    completed=True,
                )
                session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return RoutineCompletion(
                routine_id=orm.routine_id,
                date=orm.date,
                completed=bool(orm.completed),
            )

    async def is_completed(self, user_id: str, routine_id: str, target_date: date) -> bool:
        """Check whether a routine was completed on a date."""
        async with self._session_factory() as session:
            orm = await self._find_completion(session, user_id, routine_id, target_date)
            return bool(orm.completed) if orm else False

    async def completed_dates(self, user_id: str, routine_id: str) -> list[date]:
        """Completed dates of a routine, most recent first."""
        async with self._session_factory() as session:
            query = (
                select(RoutineCompletionORM.date)
                .where(
                    and_(
                        RoutineCompletionORM.user_id == user_id,
                        RoutineCompletionORM.routine_id == routine_id,
                        RoutineCompletionORM.completed.is_(True),
                    )
                )
                .order_by(RoutineCompletionORM.date.desc())
            )
            result = await session.execute(query)
            return list(result.scalars().all())

    async def completed_routine_ids(self, user_id: str, target_date: date) -> set[str]:
        """Routine ids completed on a date."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoutineCompletionORM.routine_id).where(
                    and_(
                        RoutineCompletionORM.user_id == user_id,
                        RoutineCompletionORM.date == target_date,
                        RoutineCompletionORM.completed.is_(True),
                    )
                )
            )
            return set(result.scalars().all())

    async def get_streak(self, user_id: str, routine_id: str) -> Optional[Streak]:
        """Get the stored streak of a routine."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoutineStreakORM).where(
                    and_(
                        RoutineStreakORM.user_id == user_id,
                        RoutineStreakORM.routine_id == routine_id,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return None
            return Streak(
                routine_id=orm.routine_id,
                current=orm.current_streak,
                best=orm.best_streak,
                last_completed_date=orm.last_completed,
            )

    async def save_streak(self, user_id: str, streak: Streak) -> Streak:
        """Upsert the streak of a routine."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoutineStreakORM).where(
                    and_(
                        RoutineStreakORM.user_id == user_id,
                        RoutineStreakORM.routine_id == streak.routine_id,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                orm = RoutineStreakORM(user_id=user_id, routine_id=streak.routine_id)
                session.add(orm)
            orm.current_streak = streak.current
            orm.best_streak = streak.best
            orm.last_completed = streak.last_completed_date
            orm.updated_at = datetime.utcnow()
            await session.commit()
            return streak
