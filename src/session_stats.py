"""Public SDK surface for session-stats.

This module provides a stable import path for scripted runs.
It re-exports the pipeline entry point and typed models.
"""

from __future__ import annotations

from core.config import StatsConfig
from core.event_kinds import SessionEventKind, classify_metadata
from core.types import ScanWindow, SessionItem, SessionStats, SummarizeOptions
from ingest.aggregation import aggregate_session_stats
from ingest.pipeline import summarize_sessions
from store.csv_export import render_stats_csv, write_stats_csv
from transforms.session_reducer import apply_session_item

__all__ = [
    "ScanWindow",
    "SessionEventKind",
    "SessionItem",
    "SessionStats",
    "StatsConfig",
    "SummarizeOptions",
    "aggregate_session_stats",
    "apply_session_item",
    "classify_metadata",
    "render_stats_csv",
    "summarize_sessions",
    "write_stats_csv",
]
