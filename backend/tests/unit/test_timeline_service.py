"""
Unit tests for TimelineService.
"""

from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from daybook.core.exceptions import InvalidIntervalError, NotFoundError
from daybook.models.block import ScheduleBlock
from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate
from daybook.models.enums import BlockKind, BlockSource
from daybook.models.interval import TimeInterval
from daybook.models.routine import RoutineOverride
from daybook.services.timeline_service import TimelineService

DAY = date(2025, 6, 7)


def _routine_block(routine_id: str, start: str, end: str) -> ScheduleBlock:
    return ScheduleBlock(
        id=routine_id,
        label=routine_id.title(),
        interval=TimeInterval.from_strings(start, end),
        kind=BlockKind.FLEXIBLE,
        date=DAY,
        source=BlockSource.ROUTINE,
        routine_id=routine_id,
    )


def _game_block(start: str, end: str) -> ScheduleBlock:
    return ScheduleBlock(
        id="match-1",
        label="Man City vs Arsenal",
        interval=TimeInterval.from_strings(start, end),
        kind=BlockKind.FIXED,
        date=DAY,
        source=BlockSource.GAME,
    )


def _provider(blocks):
    provider = AsyncMock()
    provider.blocks_for.return_value = blocks
    return provider


@pytest.fixture
def repos():
    override_repo = AsyncMock()
    override_repo.list_for_date.return_value = []
    custom_event_repo = AsyncMock()
    completion_repo = AsyncMock()
    completion_repo.completed_routine_ids.return_value = set()
    return override_repo, custom_event_repo, completion_repo


def _service(repos, routine_blocks=(), fixed_blocks=(), custom_blocks=()):
    override_repo, custom_event_repo, completion_repo = repos
    return TimelineService(
        routine_provider=_provider(list(routine_blocks)),
        fixed_providers=[_provider(list(fixed_blocks))],
        custom_provider=_provider(list(custom_blocks)),
        override_repo=override_repo,
        custom_event_repo=custom_event_repo,
        completion_repo=completion_repo,
    )


@pytest.mark.asyncio
async def test_load_day_merges_sources_with_layout(repos):
    service = _service(
        repos,
        routine_blocks=[_routine_block("workout", "16:00", "16:45")],
        fixed_blocks=[_game_block("15:00", "17:00")],
    )

    timeline = await service.load_day("u1", DAY)

    assert timeline.date == DAY
    assert [b.id for b in timeline.blocks] == ["workout", "match-1"]
    assert {a.block_id: (a.column, a.total_columns) for a in timeline.layout} == {
        "match-1": (0, 2),
        "workout": (1, 2),
    }


@pytest.mark.asyncio
async def test_skip_removes_routine_from_day(repos):
    override_repo, _, _ = repos
    override_repo.list_for_date.return_value = [
        RoutineOverride(routine_id="reading", date=DAY, skipped=True)
    ]
    service = _service(
        repos,
        routine_blocks=[
            _routine_block("reading", "21:15", "21:30"),
            _routine_block("dinner", "18:15", "19:00"),
        ],
    )

    timeline = await service.load_day("u1", DAY)

    assert [b.id for b in timeline.blocks] == ["dinner"]


@pytest.mark.asyncio
async def test_override_replaces_default_interval(repos):
    override_repo, _, _ = repos
    moved = TimeInterval.from_strings("07:00", "07:45")
    override_repo.list_for_date.return_value = [
        RoutineOverride(routine_id="workout", date=DAY, interval=moved)
    ]
    service = _service(repos, routine_blocks=[_routine_block("workout", "16:00", "16:45")])

    [block] = await service.flexible_blocks_for("u1", DAY)

    assert block.interval == moved
    assert block.has_explicit_end is True


@pytest.mark.asyncio
async def test_completed_routines_are_marked(repos):
    _, _, completion_repo = repos
    completion_repo.completed_routine_ids.return_value = {"reading"}
    service = _service(
        repos,
        routine_blocks=[
            _routine_block("reading", "21:15", "21:30"),
            _routine_block("dinner", "18:15", "19:00"),
        ],
    )

    timeline = await service.load_day("u1", DAY)

    assert {b.id: b.completed for b in timeline.blocks} == {"reading": True, "dinner": False}


@pytest.mark.asyncio
async def test_failing_provider_contributes_nothing(repos):
    service = _service(repos, routine_blocks=[_routine_block("dinner", "18:15", "19:00")])
    service.fixed_providers[0].blocks_for.side_effect = RuntimeError("feed down")

    timeline = await service.load_day("u1", DAY)

    assert [b.id for b in timeline.blocks] == ["dinner"]


@pytest.mark.asyncio
async def test_create_custom_event_rejects_reversed_times(repos):
    _, custom_event_repo, _ = repos
    service = _service(repos)

    with pytest.raises(InvalidIntervalError):
        await service.create_custom_event(
            "u1",
            CustomEventCreate(name="Dentist", date=DAY, start_time="11:00", end_time="10:00"),
        )
    custom_event_repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_custom_event_validates_merged_interval(repos):
    _, custom_event_repo, _ = repos
    event_id = uuid4()
    custom_event_repo.get.return_value = CustomEvent(
        id=event_id,
        user_id="u1",
        name="Dentist",
        date=DAY,
        start_time="10:00",
        end_time="11:00",
        created_at=datetime(2025, 6, 1),
        updated_at=datetime(2025, 6, 1),
    )
    service = _service(repos)

    with pytest.raises(InvalidIntervalError):
        await service.update_custom_event("u1", event_id, CustomEventUpdate(start_time="11:30"))
    custom_event_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_missing_custom_event(repos):
    _, custom_event_repo, _ = repos
    custom_event_repo.get.return_value = None
    service = _service(repos)

    with pytest.raises(NotFoundError):
        await service.update_custom_event("u1", uuid4(), CustomEventUpdate(name="x"))


@pytest.mark.asyncio
async def test_conflicts_for_dates_checks_each_date_once(repos):
    service = _service(
        repos,
        routine_blocks=[_routine_block("workout", "16:00", "16:45")],
        fixed_blocks=[_game_block("15:00", "17:00")],
    )

    conflicts = await service.conflicts_for_dates("u1", [DAY, DAY, DAY])

    assert len(conflicts) == 1
    assert conflicts[0].date == DAY
    service.fixed_providers[0].blocks_for.assert_awaited_once_with("u1", DAY)


@pytest.mark.asyncio
async def test_upcoming_conflicts_skips_dates_without_fixed_events(repos):
    service = _service(repos, routine_blocks=[_routine_block("workout", "16:00", "16:45")])

    conflicts = await service.upcoming_conflicts("u1", DAY, days=3)

    assert conflicts == []
    assert service.fixed_providers[0].blocks_for.await_count == 3
    service.routine_provider.blocks_for.assert_not_awaited()
    service.fixed_providers[0].blocks_for.assert_awaited_with("u1", DAY + timedelta(days=2))
