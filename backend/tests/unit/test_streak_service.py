"""
Unit tests for routine streaks.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from daybook.models.routine import RoutineCompletion, Streak
from daybook.services.streak_service import StreakTracker, build_streak, calculate_current_streak

TODAY = date(2025, 6, 4)


def test_streak_counts_back_from_yesterday():
    dates = [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)]

    assert calculate_current_streak(dates, TODAY) == 3


def test_streak_includes_today():
    dates = [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3), date(2025, 6, 4)]

    assert calculate_current_streak(dates, TODAY) == 4


def test_streak_broken_after_grace_day():
    dates = [date(2025, 6, 1), date(2025, 6, 2)]

    assert calculate_current_streak(dates, TODAY) == 0


def test_streak_stops_at_gap_and_ignores_duplicates():
    dates = [date(2025, 6, 4), date(2025, 6, 3), date(2025, 6, 3), date(2025, 5, 30)]

    assert calculate_current_streak(dates, TODAY) == 2


def test_no_completions():
    assert calculate_current_streak([], TODAY) == 0


def test_best_never_decreases():
    previous = Streak(routine_id="reading", current=5, best=5)

    streak = build_streak("reading", [date(2025, 6, 3)], TODAY, previous)

    assert streak.current == 1
    assert streak.best == 5
    assert streak.last_completed_date == date(2025, 6, 3)


def test_best_follows_current_when_higher():
    dates = [date(2025, 6, 2), date(2025, 6, 3), date(2025, 6, 4)]

    streak = build_streak("reading", dates, TODAY, Streak(routine_id="reading", best=2))

    assert streak.current == 3
    assert streak.best == 3


@pytest.fixture
def completion_repo():
    repo = AsyncMock()
    repo.save_streak.side_effect = lambda user_id, streak: streak
    return repo


@pytest.mark.asyncio
async def test_toggle_recomputes_and_saves(completion_repo):
    completion_repo.toggle.return_value = RoutineCompletion(
        routine_id="reading", date=TODAY, completed=True
    )
    completion_repo.completed_dates.return_value = [TODAY, date(2025, 6, 3)]
    completion_repo.get_streak.return_value = Streak(routine_id="reading", current=1, best=4)
    tracker = StreakTracker(completion_repo)

    streak = await tracker.toggle_completion("u1", "reading", TODAY, today=TODAY)

    completion_repo.toggle.assert_awaited_once_with("u1", "reading", TODAY)
    completion_repo.save_streak.assert_awaited_once()
    assert streak == Streak(routine_id="reading", current=2, best=4, last_completed_date=TODAY)


@pytest.mark.asyncio
async def test_untoggle_drops_current_streak(completion_repo):
    completion_repo.toggle.return_value = RoutineCompletion(
        routine_id="reading", date=TODAY, completed=False
    )
    completion_repo.completed_dates.return_value = [date(2025, 6, 1)]
    completion_repo.get_streak.return_value = Streak(routine_id="reading", current=1, best=3)
    tracker = StreakTracker(completion_repo)

    streak = await tracker.toggle_completion("u1", "reading", TODAY, today=TODAY)

    assert streak.current == 0
    assert streak.best == 3


@pytest.mark.asyncio
async def test_streak_for_unknown_routine_is_empty(completion_repo):
    completion_repo.get_streak.return_value = None
    tracker = StreakTracker(completion_repo)

    streak = await tracker.streak_for("u1", "lights-out")

    assert streak == Streak(routine_id="lights-out")
