"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the local
infrastructure implementations and the services built on top of them.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header

from daybook.core.config import get_settings
from daybook.infrastructure.local.block_providers import (
    ExternalCalendarProvider,
    InMemoryBlockProvider,
)
from daybook.interfaces.block_provider import IBlockProvider
from daybook.interfaces.completion_repository import ICompletionRepository
from daybook.interfaces.custom_event_repository import ICustomEventRepository
from daybook.interfaces.routine_override_repository import IRoutineOverrideRepository
from daybook.models.enums import BlockSource
from daybook.services.conflict_service import ConflictDetector
from daybook.services.streak_service import StreakTracker
from daybook.services.timeline_service import TimelineService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_routine_override_repository() -> IRoutineOverrideRepository:
    """Get routine override repository instance."""
    from daybook.infrastructure.local.routine_override_repository import (
        SqliteRoutineOverrideRepository,
    )
    return SqliteRoutineOverrideRepository()


@lru_cache()
def get_custom_event_repository() -> ICustomEventRepository:
    """Get custom event repository instance."""
    from daybook.infrastructure.local.custom_event_repository import SqliteCustomEventRepository
    return SqliteCustomEventRepository()


@lru_cache()
def get_completion_repository() -> ICompletionRepository:
    """Get completion repository instance."""
    from daybook.infrastructure.local.completion_repository import SqliteCompletionRepository
    return SqliteCompletionRepository()


# ===========================================
# Block Provider Dependencies
# ===========================================


@lru_cache()
def get_routine_provider() -> IBlockProvider:
    """Get routine generator instance."""
    from daybook.infrastructure.local.routine_provider import DefaultRoutineProvider
    settings = get_settings()
    return DefaultRoutineProvider(
        week1_start=settings.ROUTINE_WEEK1_START,
        default_item_minutes=settings.DEFAULT_FLEXIBLE_MINUTES,
    )


@lru_cache()
def get_game_provider() -> InMemoryBlockProvider:
    """Get the game schedule provider."""
    return InMemoryBlockProvider(source=BlockSource.GAME)


@lru_cache()
def get_calendar_provider() -> ExternalCalendarProvider:
    """Get the external calendar provider."""
    return ExternalCalendarProvider()


@lru_cache()
def get_fixed_providers() -> tuple[IBlockProvider, ...]:
    """Get the game and external calendar providers."""
    return (get_game_provider(), get_calendar_provider())


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_timeline_service() -> TimelineService:
    """Get timeline service instance."""
    from daybook.infrastructure.local.block_providers import CustomEventBlockProvider
    settings = get_settings()
    custom_event_repo = get_custom_event_repository()
    return TimelineService(
        routine_provider=get_routine_provider(),
        fixed_providers=list(get_fixed_providers()),
        custom_provider=CustomEventBlockProvider(custom_event_repo),
        override_repo=get_routine_override_repository(),
        custom_event_repo=custom_event_repo,
        completion_repo=get_completion_repository(),
        conflict_detector=ConflictDetector.from_settings(settings),
        lookahead_days=settings.CONFLICT_LOOKAHEAD_DAYS,
    )


@lru_cache()
def get_streak_tracker() -> StreakTracker:
    """Get streak tracker instance."""
    return StreakTracker(get_completion_repository())


# ===========================================
# User
# ===========================================


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> str:
    """Single-user app: the header overrides the configured default user."""
    return x_user_id or get_settings().DEFAULT_USER_ID


# Type aliases for cleaner dependency injection
OverrideRepo = Annotated[IRoutineOverrideRepository, Depends(get_routine_override_repository)]
CustomEventRepo = Annotated[ICustomEventRepository, Depends(get_custom_event_repository)]
CompletionRepo = Annotated[ICompletionRepository, Depends(get_completion_repository)]
Timeline = Annotated[TimelineService, Depends(get_timeline_service)]
Streaks = Annotated[StreakTracker, Depends(get_streak_tracker)]
GameProvider = Annotated[InMemoryBlockProvider, Depends(get_game_provider)]
CalendarProvider = Annotated[ExternalCalendarProvider, Depends(get_calendar_provider)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
