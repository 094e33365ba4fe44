"""
Column layout for a day's blocks.

Overlapping blocks are grouped into clusters (connected components under the
overlap relation) and each cluster is packed into rendering columns with a
greedy first-fit pass. The greedy result is not a guaranteed minimum
colouring; callers and tests depend on the greedy assignment as is.
"""

from __future__ import annotations

from typing import Sequence

from daybook.core.logger import setup_logger
from daybook.models.block import ColumnAssignment, ScheduleBlock

logger = setup_logger(__name__)


def sort_for_layout(blocks: Sequence[ScheduleBlock]) -> list[int]:
    """Indices of ``blocks`` by start ascending, then longer blocks first."""
    return sorted(
        range(len(blocks)),
        key=lambda i: (blocks[i].interval.start_minute, -blocks[i].interval.duration),
    )


def cluster_blocks(blocks: Sequence[ScheduleBlock]) -> list[list[int]]:
    """Group block indices into overlap clusters, in sorted arrival order.

    A block joins the first cluster holding any member it overlaps, checked
    against every member rather than just the latest one.
    """
    clusters: list[list[int]] = []
    for index in sort_for_layout(blocks):
        interval = blocks[index].interval
        for cluster in clusters:
            if any(interval.overlaps(blocks[member].interval) for member in cluster):
                cluster.append(index)
                break
        else:
            clusters.append([index])
    return clusters


def assign_columns(blocks: Sequence[ScheduleBlock], cluster: Sequence[int]) -> dict[int, int]:
    """First-fit column per block index within one cluster."""
    column_ends: list[int] = []
    columns: dict[int, int] = {}
    for index in cluster:
        interval = blocks[index].interval
        for column, end in enumerate(column_ends):
            if end <= interval.start_minute:
                break
        else:
            column = len(column_ends)
            column_ends.append(interval.end_minute)
        column_ends[column] = max(column_ends[column], interval.end_minute)
        columns[index] = column
    return columns


def compute_layout(blocks: Sequence[ScheduleBlock]) -> list[ColumnAssignment]:
    """Column assignment per block, returned in input order.

    Pure and synchronous; always recomputed in full from the current set.
    """
    assignments: list[ColumnAssignment | None] = [None] * len(blocks)
    clusters = cluster_blocks(blocks)
    for cluster in clusters:
        columns = assign_columns(blocks, cluster)
        total = max(columns.values()) + 1
        for index, column in columns.items():
            assignments[index] = ColumnAssignment(
                block_id=blocks[index].id,
                column=column,
                total_columns=total,
            )

    logger.debug(f"Layout: {len(blocks)} blocks in {len(clusters)} clusters")
    return [assignment for assignment in assignments if assignment is not None]
