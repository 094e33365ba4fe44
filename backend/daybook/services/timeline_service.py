"""
Timeline service.

Assembles a day from the block providers, applies routine overrides and
skips, marks completions and computes the column layout. Also owns the
override / custom-event writes and forward-window conflict scans.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional
from uuid import UUID

from daybook.core.exceptions import NotFoundError
from daybook.core.logger import setup_logger
from daybook.interfaces.block_provider import IBlockProvider
from daybook.interfaces.completion_repository import ICompletionRepository
from daybook.interfaces.custom_event_repository import ICustomEventRepository
from daybook.interfaces.routine_override_repository import IRoutineOverrideRepository
from daybook.models.block import Conflict, DayTimeline, ScheduleBlock
from daybook.models.custom_event import CustomEvent, CustomEventCreate, CustomEventUpdate
from daybook.models.interval import TimeInterval
from daybook.models.routine import RoutineOverride
from daybook.services.conflict_service import ConflictDetector
from daybook.services.layout_service import compute_layout

logger = setup_logger(__name__)


class TimelineService:
    """Service for building and editing a day's timeline."""

    def __init__(
        self,
        routine_provider: IBlockProvider,
        fixed_providers: list[IBlockProvider],
        custom_provider: IBlockProvider,
        override_repo: IRoutineOverrideRepository,
        custom_event_repo: ICustomEventRepository,
        completion_repo: ICompletionRepository,
        conflict_detector: Optional[ConflictDetector] = None,
        lookahead_days: int = 14,
    ):
        self.routine_provider = routine_provider
        self.fixed_providers = fixed_providers
        self.custom_provider = custom_provider
        self.override_repo = override_repo
        self.custom_event_repo = custom_event_repo
        self.completion_repo = completion_repo
        self.conflict_detector = conflict_detector or ConflictDetector()
        self.lookahead_days = lookahead_days

    async def _fetch(
        self, provider: IBlockProvider, user_id: str, target_date: date
    ) -> list[ScheduleBlock]:
        """Blocks from one provider; a failing provider contributes nothing."""
        try:
            return await provider.blocks_for(user_id, target_date)
        except Exception as e:
            logger.warning(
                f"Provider {type(provider).__name__} failed for {target_date.isoformat()}: {e}"
            )
            return []

    async def flexible_blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        """Routine blocks with per-date overrides applied and skips removed."""
        blocks = await self._fetch(self.routine_provider, user_id, target_date)
        if not blocks:
            return []
        try:
            overrides = await self.override_repo.list_for_date(user_id, target_date)
        except Exception as e:
            logger.warning(f"Failed to load overrides for {target_date.isoformat()}: {e}")
            overrides = []
        by_routine = {override.routine_id: override for override in overrides}

        result: list[ScheduleBlock] = []
        for block in blocks:
            override = by_routine.get(block.routine_id)
            if override is None:
                result.append(block)
            elif override.is_skipped:
                continue
            elif override.interval is not None:
                result.append(
                    block.model_copy(
                        update={"interval": override.interval, "has_explicit_end": True}
                    )
                )
            else:
                result.append(block)
        return result

    async def fixed_blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        blocks: list[ScheduleBlock] = []
        for provider in self.fixed_providers:
            blocks.extend(await self._fetch(provider, user_id, target_date))
        return blocks

    async def load_day(self, user_id: str, target_date: date) -> DayTimeline:
        """All visible blocks of a date with a freshly computed layout."""
        flexible = await self.flexible_blocks_for(user_id, target_date)
        fixed = await self.fixed_blocks_for(user_id, target_date)
        custom = await self._fetch(self.custom_provider, user_id, target_date)

        try:
            completed_ids = await self.completion_repo.completed_routine_ids(user_id, target_date)
        except Exception as e:
            logger.warning(f"Failed to load completions for {target_date.isoformat()}: {e}")
            completed_ids = set()
        flexible = [
            block.model_copy(update={"completed": block.routine_id in completed_ids})
            for block in flexible
        ]

        blocks = [*flexible, *fixed, *custom]
        return DayTimeline(date=target_date, blocks=blocks, layout=compute_layout(blocks))

    # ===========================================
    # Routine overrides
    # ===========================================

    async def set_override(
        self, user_id: str, routine_id: str, target_date: date, interval: TimeInterval
    ) -> RoutineOverride:
        return await self.override_repo.set(user_id, routine_id, target_date, interval)

    async def reset_override(self, user_id: str, routine_id: str, target_date: date) -> bool:
        """Drop the override or skip so the default interval applies again."""
        return await self.override_repo.remove(user_id, routine_id, target_date)

    async def skip_routine(
        self, user_id: str, routine_id: str, target_date: date
    ) -> RoutineOverride:
        return await self.override_repo.skip(user_id, routine_id, target_date)

    # ===========================================
    # Custom events
    # ===========================================

    async def create_custom_event(self, user_id: str, data: CustomEventCreate) -> CustomEvent:
        # Raises InvalidIntervalError when start >= end
        data.to_interval()
        return await self.custom_event_repo.create(user_id, data)

    async def update_custom_event(
        self, user_id: str, event_id: UUID, update: CustomEventUpdate
    ) -> CustomEvent:
        """Update a custom event, validating the merged interval first."""
        existing = await self.custom_event_repo.get(user_id, event_id)
        if not existing:
            raise NotFoundError(f"CustomEvent {event_id} not found")
        TimeInterval.from_strings(
            update.start_time or existing.start_time,
            update.end_time or existing.end_time,
        )
        return await self.custom_event_repo.update(user_id, event_id, update)

    async def delete_custom_event(self, user_id: str, event_id: UUID) -> bool:
        return await self.custom_event_repo.delete(user_id, event_id)

    # ===========================================
    # Conflicts
    # ===========================================

    async def conflicts_for_dates(self, user_id: str, dates: Iterable[date]) -> list[Conflict]:
        """Conflicts per distinct date; each date is checked once."""
        conflicts: list[Conflict] = []
        for target_date in dict.fromkeys(dates):
            fixed = await self.fixed_blocks_for(user_id, target_date)
            if not fixed:
                continue
            flexible = await self.flexible_blocks_for(user_id, target_date)
            conflicts.extend(
                self.conflict_detector.detect_conflicts(fixed, flexible, on_date=target_date)
            )
        return conflicts

    async def upcoming_conflicts(
        self, user_id: str, start: date, days: Optional[int] = None
    ) -> list[Conflict]:
        days = self.lookahead_days if days is None else days
        return await self.conflicts_for_dates(
            user_id, (start + timedelta(days=offset) for offset in range(days))
        )
