"""
Fixed event feed endpoints.

Games and external calendar events are pushed in per date and show up as
FIXED blocks in the timeline and the conflict scan.
"""

from __future__ import annotations

from datetime import date
from uuid import uuid4

from fastapi import APIRouter, HTTPException, status

from daybook.api.deps import CalendarProvider, GameProvider
from daybook.core.exceptions import ValidationError
from daybook.core.logger import setup_logger
from daybook.models.block import ScheduleBlock
from daybook.models.fixed_event import (
    CalendarEventImport,
    CalendarImportResult,
    FixedEventCreate,
)

router = APIRouter()
logger = setup_logger(__name__)


@router.post(
    "/fixed-events/{target_date}",
    response_model=ScheduleBlock,
    status_code=status.HTTP_201_CREATED,
)
async def add_fixed_event(
    target_date: date,
    payload: FixedEventCreate,
    provider: GameProvider,
):
    """Add a game to the schedule of a date."""
    try:
        payload.to_interval()
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )
    return provider.add(
        payload.id or str(uuid4()),
        payload.label,
        target_date,
        payload.start_time,
        payload.end_time,
    )


@router.post("/calendar-events/{target_date}", response_model=CalendarImportResult)
async def import_calendar_events(
    target_date: date,
    events: list[CalendarEventImport],
    provider: CalendarProvider,
):
    """Import calendar events; events Daybook exported itself are skipped."""
    # Validate the whole batch before importing any of it
    for event in events:
        try:
            event.to_interval()
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Event {event.id}: {e.message}",
            )

    imported = provider.import_events(target_date, [event.model_dump() for event in events])
    logger.info(f"Imported {imported}/{len(events)} calendar events for {target_date.isoformat()}")
    return CalendarImportResult(imported=imported, skipped=len(events) - imported)
