"""
Local block providers.

In-memory stand-ins for the game and external calendar feeds, and the
adapter that exposes stored custom events as CUSTOM blocks.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from daybook.interfaces.block_provider import IBlockProvider
from daybook.interfaces.custom_event_repository import ICustomEventRepository
from daybook.models.block import ScheduleBlock
from daybook.models.custom_event import CustomEvent
from daybook.models.enums import BlockKind, BlockSource
from daybook.models.interval import TimeInterval

# Marker carried by events Daybook exported to an external calendar
EXPORTED_TAG = "daybook"


class InMemoryBlockProvider(IBlockProvider):
    """FIXED blocks held in memory, keyed by date."""

    def __init__(self, source: BlockSource = BlockSource.GAME):
        self.source = source
        self._blocks: dict[date, list[ScheduleBlock]] = defaultdict(list)

    def add(
        self,
        block_id: str,
        label: str,
        target_date: date,
        start_time: str,
        end_time: str,
    ) -> ScheduleBlock:
        block = ScheduleBlock(
            id=block_id,
            label=label,
            interval=TimeInterval.from_strings(start_time, end_time),
            kind=BlockKind.FIXED,
            date=target_date,
            source=self.source,
        )
        self._blocks[target_date].append(block)
        return block

    def clear(self) -> None:
        self._blocks.clear()

    async def blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        return list(self._blocks.get(target_date, []))


class ExternalCalendarProvider(InMemoryBlockProvider):
    """Imported calendar events, minus the ones Daybook exported itself."""

    def __init__(self, exported_tag: str = EXPORTED_TAG):
        super().__init__(source=BlockSource.CALENDAR)
        self.exported_tag = exported_tag

    def import_events(self, target_date: date, events: Iterable[dict]) -> int:
        """Import raw events with ``id``, ``summary``, ``start``, ``end`` and optional ``tag``."""
        count = 0
        for event in events:
            if self.is_exported(event.get("tag")):
                continue
            self.add(event["id"], event["summary"], target_date, event["start"], event["end"])
            count += 1
        return count

    def is_exported(self, tag: Optional[str]) -> bool:
        return tag == self.exported_tag


def custom_event_to_block(event: CustomEvent) -> ScheduleBlock:
    return ScheduleBlock(
        id=str(event.id),
        label=event.name,
        interval=event.to_interval(),
        kind=BlockKind.CUSTOM,
        date=event.date,
        source=BlockSource.CUSTOM,
    )


class CustomEventBlockProvider(IBlockProvider):
    """Stored custom events as CUSTOM blocks."""

    def __init__(self, repo: ICustomEventRepository):
        self.repo = repo

    async def blocks_for(self, user_id: str, target_date: date) -> list[ScheduleBlock]:
        events = await self.repo.list_for_date(user_id, target_date)
        return [custom_event_to_block(event) for event in events]
