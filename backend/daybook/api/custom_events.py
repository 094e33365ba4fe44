"""
Custom event API endpoints.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from daybook.api.deps import CurrentUserId, CustomEventRepo, Timeline
from daybook.core.exceptions import NotFoundError, ValidationError
from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate

router = APIRouter()


@router.get("", response_model=list[CustomEvent])
async def list_custom_events(
    user_id: CurrentUserId,
    repo: CustomEventRepo,
    target_date: date = Query(..., alias="date"),
):
    return await repo.list_for_date(user_id, target_date)


@router.post("", response_model=CustomEvent, status_code=status.HTTP_201_CREATED)
async def create_custom_event(
    payload: CustomEventCreate,
    user_id: CurrentUserId,
    service: Timeline,
):
    try:
        return await service.create_custom_event(user_id, payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )


@router.patch("/{event_id}", response_model=CustomEvent)
async def update_custom_event(
    event_id: UUID,
    payload: CustomEventUpdate,
    user_id: CurrentUserId,
    service: Timeline,
):
    try:
        return await service.update_custom_event(user_id, event_id, payload)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_custom_event(
    event_id: UUID,
    user_id: CurrentUserId,
    service: Timeline,
):
    deleted = await service.delete_custom_event(user_id, event_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CustomEvent {event_id} not found",
        )
