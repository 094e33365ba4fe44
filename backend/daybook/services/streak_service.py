"""
Routine completion streaks.

A streak stays current while the latest completion is today or yesterday
(one-day grace), and counts consecutive days back from that completion.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from daybook.core.logger import setup_logger
from daybook.interfaces.completion_repository import ICompletionRepository
from daybook.models.routine import Streak

logger = setup_logger(__name__)


def calculate_current_streak(completed_dates: Iterable[date], today: date) -> int:
    """Length of the consecutive run ending at the latest completion.

    Returns 0 when the latest completion is neither ``today`` nor yesterday.
    """
    dates = sorted(set(completed_dates), reverse=True)
    if not dates:
        return 0
    yesterday = today - timedelta(days=1)
    if dates[0] not in (today, yesterday):
        return 0

    current = 1
    for previous, day in zip(dates, dates[1:]):
        if previous - day != timedelta(days=1):
            break
        current += 1
    return current


def build_streak(
    routine_id: str,
    completed_dates: Iterable[date],
    today: date,
    previous: Optional[Streak] = None,
) -> Streak:
    dates = sorted(set(completed_dates), reverse=True)
    current = calculate_current_streak(dates, today)
    best = max(current, previous.best if previous else 0)
    return Streak(
        routine_id=routine_id,
        current=current,
        best=best,
        last_completed_date=dates[0] if dates else None,
    )


class StreakTracker:
    """Recomputes and stores streaks whenever a completion is toggled."""

    def __init__(self, completion_repo: ICompletionRepository):
        self.completion_repo = completion_repo

    async def recompute(
        self, user_id: str, routine_id: str, today: Optional[date] = None
    ) -> Streak:
        today = today or date.today()
        dates = await self.completion_repo.completed_dates(user_id, routine_id)
        previous = await self.completion_repo.get_streak(user_id, routine_id)
        streak = build_streak(routine_id, dates, today, previous)
        return await self.completion_repo.save_streak(user_id, streak)

    async def toggle_completion(
        self,
        user_id: str,
        routine_id: str,
        target_date: date,
        today: Optional[date] = None,
    ) -> Streak:
        completion = await self.completion_repo.toggle(user_id, routine_id, target_date)
        streak = await self.recompute(user_id, routine_id, today)
        logger.info(
            f"Routine {routine_id} on {target_date.isoformat()} "
            f"{'completed' if completion.completed else 'uncompleted'}: "
            f"streak {streak.current} (best {streak.best})"
        )
        return streak

    async def streak_for(self, user_id: str, routine_id: str) -> Streak:
        """Stored streak, or an empty one if the routine was never toggled."""
        stored = await self.completion_repo.get_streak(user_id, routine_id)
        return stored or Streak(routine_id=routine_id)
