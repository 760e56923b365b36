"""Aggregation of session items into per-session stats.

This module owns the session id to stats mapping for one run and feeds
every item, in delivered order, through the session reducer.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.logging_config import get_logger
from core.types import SessionItem, SessionStats
from transforms.session_reducer import apply_session_item

_LOGGER = get_logger(__name__)


def aggregate_session_stats(
    batches: Iterable[Sequence[SessionItem]],
) -> dict[str, SessionStats]:
    """Fold item batches into one stats record per session.

    Args:
        batches: Item batches in source delivery order.

    Returns:
        Mapping from session id to its accumulated stats.

    Raises:
        StatsReduceError: If any item has an unknown metadata tag.
        StatsSourceError: If the batch source fails mid-stream.
    """
    stats_by_id: dict[str, SessionStats] = {}
    batch_count = 0
    item_count = 0
    for batch in batches:
        for item in batch:
            stats = stats_by_id.get(item.session_id)
            if stats is None:
                stats = SessionStats(session_id=item.session_id)
                stats_by_id[item.session_id] = stats
            apply_session_item(stats, item)
        batch_count += 1
        item_count += len(batch)
        _LOGGER.debug("item_batch_reduced", batch=batch_count, items=len(batch))
    _LOGGER.info(
        "aggregation_completed",
        batches=batch_count,
        items=item_count,
        sessions=len(stats_by_id),
    )
    return stats_by_id
