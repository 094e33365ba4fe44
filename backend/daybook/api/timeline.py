"""
Timeline API endpoints.

Day view with column layout, and conflicts over a forward window.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from daybook.api.deps import CurrentUserId, Timeline
from daybook.models.block import Conflict, DayTimeline

router = APIRouter()


@router.get("/timeline/{target_date}", response_model=DayTimeline)
async def get_timeline(
    target_date: date,
    user_id: CurrentUserId,
    service: Timeline,
):
    """Blocks of a date with overrides, completions and layout applied."""
    return await service.load_day(user_id, target_date)


@router.get("/conflicts", response_model=list[Conflict])
async def list_conflicts(
    user_id: CurrentUserId,
    service: Timeline,
    start: Optional[date] = Query(None, description="First date (default: today)"),
    days: Optional[int] = Query(None, ge=1, le=60, description="Window length"),
):
    return await service.upcoming_conflicts(user_id, start or date.today(), days)
