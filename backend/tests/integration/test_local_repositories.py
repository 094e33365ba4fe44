"""
Integration tests for the SQLite repositories.

Each test runs against a fresh in-memory database.
"""

from datetime import date
from uuid import uuid4

import pytest

from daybook.core.exceptions import NotFoundError
from daybook.infrastructure.local.completion_repository import SqliteCompletionRepository
from daybook.infrastructure.local.custom_event_repository import SqliteCustomEventRepository
from daybook.infrastructure.local.routine_override_repository import (
    SqliteRoutineOverrideRepository,
)
from daybook.models.custom_event import CustomEventCreate, CustomEventUpdate
from daybook.models.interval import TimeInterval
from daybook.models.routine import Streak
from daybook.services.streak_service import StreakTracker

DAY = date(2025, 6, 7)


# ===========================================
# Routine overrides
# ===========================================


@pytest.mark.asyncio
async def test_set_and_get_override(session_factory, test_user_id):
    repo = SqliteRoutineOverrideRepository(session_factory=session_factory)
    interval = TimeInterval.from_strings("07:00", "07:45")

    created = await repo.set(test_user_id, "peloton", DAY, interval)
    fetched = await repo.get(test_user_id, "peloton", DAY)

    assert created.interval == interval
    assert fetched.interval == interval
    assert fetched.is_skipped is False
    assert await repo.get(test_user_id, "peloton", date(2025, 6, 8)) is None


@pytest.mark.asyncio
async def test_set_after_skip_clears_skip(session_factory, test_user_id):
    repo = SqliteRoutineOverrideRepository(session_factory=session_factory)

    skipped = await repo.skip(test_user_id, "reading", DAY)
    assert skipped.is_skipped is True
    assert skipped.interval is None

    updated = await repo.set(
        test_user_id, "reading", DAY, TimeInterval.from_strings("22:00", "22:15")
    )
    overrides = await repo.list_for_date(test_user_id, DAY)

    assert updated.is_skipped is False
    assert len(overrides) == 1
    assert overrides[0].interval.start_time == "22:00"


@pytest.mark.asyncio
async def test_remove_override(session_factory, test_user_id):
    repo = SqliteRoutineOverrideRepository(session_factory=session_factory)
    await repo.skip(test_user_id, "reading", DAY)

    assert await repo.remove(test_user_id, "reading", DAY) is True
    assert await repo.remove(test_user_id, "reading", DAY) is False
    assert await repo.list_for_date(test_user_id, DAY) == []


@pytest.mark.asyncio
async def test_overrides_are_per_user(session_factory, test_user_id):
    repo = SqliteRoutineOverrideRepository(session_factory=session_factory)
    await repo.skip(test_user_id, "reading", DAY)

    assert await repo.list_for_date("someone_else", DAY) == []


# ===========================================
# Custom events
# ===========================================


@pytest.mark.asyncio
async def test_custom_event_crud(session_factory, test_user_id):
    repo = SqliteCustomEventRepository(session_factory=session_factory)

    created = await repo.create(
        test_user_id,
        CustomEventCreate(name="Dentist", date=DAY, start_time="10:00", end_time="11:00"),
    )
    assert created.id is not None
    assert created.user_id == test_user_id

    updated = await repo.update(
        test_user_id,
        created.id,
        CustomEventUpdate(start_time="10:30", end_time="11:30", date=date(2025, 6, 8)),
    )
    assert updated.name == "Dentist"
    assert updated.start_time == "10:30"
    assert updated.date == date(2025, 6, 8)
    assert await repo.list_for_date(test_user_id, DAY) == []

    assert await repo.delete(test_user_id, created.id) is True
    assert await repo.get(test_user_id, created.id) is None
    assert await repo.delete(test_user_id, created.id) is False


@pytest.mark.asyncio
async def test_custom_events_listed_by_start_time(session_factory, test_user_id):
    repo = SqliteCustomEventRepository(session_factory=session_factory)
    for name, start, end in [("Late", "18:00", "19:00"), ("Early", "08:00", "08:30")]:
        await repo.create(
            test_user_id, CustomEventCreate(name=name, date=DAY, start_time=start, end_time=end)
        )

    events = await repo.list_for_date(test_user_id, DAY)

    assert [event.name for event in events] == ["Early", "Late"]


@pytest.mark.asyncio
async def test_update_missing_custom_event(session_factory, test_user_id):
    repo = SqliteCustomEventRepository(session_factory=session_factory)

    with pytest.raises(NotFoundError):
        await repo.update(test_user_id, uuid4(), CustomEventUpdate(name="x"))


# ===========================================
# Completions and streaks
# ===========================================


@pytest.mark.asyncio
async def test_toggle_completion(session_factory, test_user_id):
    repo = SqliteCompletionRepository(session_factory=session_factory)

    first = await repo.toggle(test_user_id, "reading", DAY)
    assert first.completed is True
    assert await repo.is_completed(test_user_id, "reading", DAY) is True
    assert await repo.completed_routine_ids(test_user_id, DAY) == {"reading"}

    second = await repo.toggle(test_user_id, "reading", DAY)
    assert second.completed is False
    assert await repo.completed_routine_ids(test_user_id, DAY) == set()


@pytest.mark.asyncio
async def test_completed_dates_most_recent_first(session_factory, test_user_id):
    repo = SqliteCompletionRepository(session_factory=session_factory)
    for day in (date(2025, 6, 1), date(2025, 6, 3), date(2025, 6, 2)):
        await repo.toggle(test_user_id, "reading", day)

    assert await repo.completed_dates(test_user_id, "reading") == [
        date(2025, 6, 3),
        date(2025, 6, 2),
        date(2025, 6, 1),
    ]


@pytest.mark.asyncio
async def test_save_and_get_streak(session_factory, test_user_id):
    repo = SqliteCompletionRepository(session_factory=session_factory)
    assert await repo.get_streak(test_user_id, "reading") is None

    streak = Streak(routine_id="reading", current=2, best=5, last_completed_date=DAY)
    await repo.save_streak(test_user_id, streak)
    await repo.save_streak(test_user_id, streak.model_copy(update={"current": 3}))

    stored = await repo.get_streak(test_user_id, "reading")
    assert stored == Streak(routine_id="reading", current=3, best=5, last_completed_date=DAY)


@pytest.mark.asyncio
async def test_streak_tracker_with_sqlite(session_factory, test_user_id):
    tracker = StreakTracker(SqliteCompletionRepository(session_factory=session_factory))
    today = date(2025, 6, 4)

    for day in (date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)):
        await tracker.toggle_completion(test_user_id, "reading", day, today=today)
    assert (await tracker.streak_for(test_user_id, "reading")).current == 3

    streak = await tracker.toggle_completion(test_user_id, "reading", today, today=today)
    assert streak.current == 4
    assert streak.best == 4

    streak = await tracker.toggle_completion(test_user_id, "reading", today, today=today)
    assert streak.current == 3
    assert streak.best == 4
