"""Summarize orchestration for one session-stats run.

This module selects the item source, folds every item into session
stats, and renders the CSV table. Nothing is written until the whole
table has been rendered, so a failed run produces no output.
"""

from __future__ import annotations

from typing import Iterable

from core.config import StatsConfig
from core.logging_config import get_logger
from core.types import SessionItem, SummarizeOptions
from ingest.aggregation import aggregate_session_stats
from ingest.dynamo_reader import create_dynamodb_client, iter_item_batches
from ingest.item_file_reader import iter_file_batches
from store.csv_export import render_stats_csv

_LOGGER = get_logger(__name__)


def summarize_sessions(options: SummarizeOptions, config: StatsConfig) -> str:
    """Run scan, aggregation, and CSV rendering for one window.

    Args:
        options: Summarize request options.
        config: Runtime configuration for AWS session defaults.

    Returns:
        Rendered CSV table.

    Raises:
        StatsSourceError: If items cannot be retrieved.
        StatsReduceError: If any item has an unknown metadata tag.
    """
    _LOGGER.info(
        "summarize_started",
        table=options.table_name,
        source_file=options.source_file,
        window_start=options.window.start,
        window_end=options.window.end,
    )
    stats_by_id = aggregate_session_stats(_open_item_batches(options, config))
    return render_stats_csv(stats_by_id)


def _open_item_batches(
    options: SummarizeOptions,
    config: StatsConfig,
) -> Iterable[list[SessionItem]]:
    if options.source_file:
        return iter_file_batches(options.source_file, options.window)
    dynamodb_client = create_dynamodb_client(config)
    return iter_item_batches(
        dynamodb_client,
        options.table_name,
        options.window,
        page_size=config.page_size,
    )
