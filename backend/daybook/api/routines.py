"""
Routine API endpoints.

Per-date overrides and skips, completion toggles and streaks.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from daybook.api.deps import CurrentUserId, Streaks, Timeline
from daybook.core.exceptions import ValidationError
from daybook.models.routine import RoutineOverride, RoutineOverrideSet, Streak

router = APIRouter()


@router.put("/{routine_id}/overrides/{target_date}", response_model=RoutineOverride)
async def set_override(
    routine_id: str,
    target_date: date,
    payload: RoutineOverrideSet,
    user_id: CurrentUserId,
    service: Timeline,
):
    """Replace the routine's default interval on one date."""
    try:
        interval = payload.to_interval()
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )
    return await service.set_override(user_id, routine_id, target_date, interval)


@router.delete("/{routine_id}/overrides/{target_date}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_override(
    routine_id: str,
    target_date: date,
    user_id: CurrentUserId,
    service: Timeline,
):
    """Restore the default interval (also clears a skip)."""
    removed = await service.reset_override(user_id, routine_id, target_date)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No override for {routine_id} on {target_date.isoformat()}",
        )


@router.post(
    "/{routine_id}/skips/{target_date}",
    response_model=RoutineOverride,
    status_code=status.HTTP_201_CREATED,
)
async def skip_routine(
    routine_id: str,
    target_date: date,
    user_id: CurrentUserId,
    service: Timeline,
):
    return await service.skip_routine(user_id, routine_id, target_date)


@router.post("/{routine_id}/completions/{target_date}", response_model=Streak)
async def toggle_completion(
    routine_id: str,
    target_date: date,
    user_id: CurrentUserId,
    tracker: Streaks,
    today: Optional[date] = Query(None, description="Client's local date"),
):
    """Flip the completion flag and return the recomputed streak."""
    return await tracker.toggle_completion(user_id, routine_id, target_date, today=today)


@router.get("/{routine_id}/streak", response_model=Streak)
async def get_streak(
    routine_id: str,
    user_id: CurrentUserId,
    tracker: Streaks,
):
    return await tracker.streak_for(user_id, routine_id)
