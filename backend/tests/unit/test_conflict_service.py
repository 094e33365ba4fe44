"""
Unit tests for conflict detection and suggestions.
"""

from datetime import date

import pytest

from daybook.core.config import Settings
from daybook.models.block import ScheduleBlock
from daybook.models.enums import BlockKind, BlockSource
from daybook.models.interval import TimeInterval
from daybook.services.conflict_service import ConflictDetector

DAY = date(2025, 6, 7)


def _fixed(label: str, start: str, end: str) -> ScheduleBlock:
    return ScheduleBlock(
        id=f"game-{label}",
        label=label,
        interval=TimeInterval.from_strings(start, end),
        kind=BlockKind.FIXED,
        date=DAY,
        source=BlockSource.GAME,
    )


def _flexible(
    routine_id: str, label: str, start: str, end: str, has_explicit_end: bool = True
) -> ScheduleBlock:
    return ScheduleBlock(
        id=routine_id,
        label=label,
        interval=TimeInterval.from_strings(start, end),
        kind=BlockKind.FLEXIBLE,
        date=DAY,
        source=BlockSource.ROUTINE,
        routine_id=routine_id,
        has_explicit_end=has_explicit_end,
    )


@pytest.fixture
def detector():
    return ConflictDetector()


def test_suggests_slot_before_fixed_event(detector):
    match = _fixed("Man City vs Arsenal", "15:00", "17:00")
    workout = _flexible("workout", "Workout", "16:00", "16:45")

    conflicts = detector.detect_conflicts([match], [workout], on_date=DAY)

    assert len(conflicts) == 1
    assert conflicts[0].fixed_event.id == match.id
    assert conflicts[0].flexible_item.id == "workout"
    assert conflicts[0].date == DAY
    assert conflicts[0].suggestion == (
        'Move "Workout" to 14:00-14:45 (before Man City vs Arsenal)'
    )


def test_suggests_slot_after_when_before_is_too_early(detector):
    early = _fixed("Early Kickoff", "06:00", "07:00")
    breakfast = _flexible("breakfast", "Breakfast", "06:30", "07:00")

    [conflict] = detector.detect_conflicts([early], [breakfast])

    assert conflict.suggestion == 'Move "Breakfast" to 07:15-07:45 (after Early Kickoff)'


def test_workout_falls_back_to_morning(detector):
    marathon = _fixed("Marathon", "06:10", "22:50")
    peloton = _flexible("peloton", "Peloton Workout", "17:30", "18:15")

    [conflict] = detector.detect_conflicts([marathon], [peloton])

    assert conflict.suggestion == 'Move "Peloton Workout" to the morning (before Marathon)'


def test_generic_adjust_fallback(detector):
    marathon = _fixed("Marathon", "06:10", "22:50")
    reading = _flexible("reading", "Reading", "21:15", "21:30")

    [conflict] = detector.detect_conflicts([marathon], [reading])

    assert conflict.suggestion == 'Adjust "Reading" around Marathon (06:10-22:50)'


def test_touching_events_do_not_conflict(detector):
    fixed = _fixed("Match", "10:00", "11:00")
    before = _flexible("a", "A", "09:00", "10:00")
    after = _flexible("b", "B", "11:00", "11:30")

    assert detector.detect_conflicts([fixed], [before, after]) == []


def test_one_minute_overlap_conflicts(detector):
    fixed = _fixed("Match", "09:59", "11:00")
    item = _flexible("a", "A", "09:00", "10:00")

    assert len(detector.detect_conflicts([fixed], [item])) == 1


def test_item_without_end_counts_as_default_length(detector):
    fixed = _fixed("Match", "10:30", "11:00")
    item = _flexible("stretch", "Stretch", "10:00", "12:00", has_explicit_end=False)

    assert detector.effective_interval(item) == TimeInterval.from_strings("10:00", "10:15")
    assert detector.detect_conflicts([fixed], [item]) == []


def test_every_pair_is_reported(detector):
    fixed = [_fixed("A", "09:00", "10:00"), _fixed("B", "09:30", "11:00")]
    flexible = [_flexible("x", "X", "09:45", "10:15"), _flexible("y", "Y", "12:00", "13:00")]

    conflicts = detector.detect_conflicts(fixed, flexible)

    assert [(c.fixed_event.label, c.flexible_item.label) for c in conflicts] == [
        ("A", "X"),
        ("B", "X"),
    ]


def test_from_settings_reads_constants():
    settings = Settings(
        DEFAULT_FLEXIBLE_MINUTES=20,
        CONFLICT_BUFFER_MINUTES=10,
        SUGGESTION_EARLIEST="07:00",
        SUGGESTION_LATEST_END="22:00",
        WORKOUT_ROUTINE_IDS=["run"],
    )

    detector = ConflictDetector.from_settings(settings)

    assert detector.default_flexible_minutes == 20
    assert detector.buffer_minutes == 10
    assert detector.earliest_start == 420
    assert detector.latest_end == 1320
    assert detector.workout_ids == frozenset({"run"})
