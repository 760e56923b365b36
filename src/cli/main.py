"""Session-stats CLI entry points.
This module exposes the summarize and kinds commands.
It maps argparse commands onto pipeline calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
from typing import Any, Sequence

from core.config import StatsConfig, build_scan_window
from core.errors import StatsError
from core.event_kinds import SessionEventKind
from core.job_file import JobFile, load_job_file
from core.types import SummarizeOptions
from ingest.pipeline import summarize_sessions
from store.csv_export import write_stats_csv


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="session-stats",
        description="Summarize session lifecycles from the session event table",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_summarize_command(subparsers)
    _add_kinds_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the session-stats CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "summarize":
            return _run_summarize_command(args)
        if args.command == "kinds":
            return _run_kinds_command()
    except StatsError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace, job: JobFile) -> StatsConfig:
    """Layer job file values and CLI flags over env config.

    Args:
        args: Parsed CLI args.
        job: Loaded job file, empty when none was given.

    Returns:
        Validated config with overrides applied.
    """
    config = StatsConfig.from_env()
    table_name = args.table or job.table_name or config.table_name
    region = args.region or job.region or config.region
    profile = args.profile or job.profile or config.profile
    window = build_scan_window(
        args.window_start or job.window_start or config.window_start,
        args.window_end or job.window_end or config.window_end,
    )
    return replace(
        config,
        table_name=table_name,
        region=region,
        profile=profile,
        window_start=window.start,
        window_end=window.end,
    )


def _run_summarize_command(args: argparse.Namespace) -> int:
    """Handle summarize command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    job = load_job_file(args.job_file) if args.job_file else JobFile()
    config = _build_config(args, job)
    options = SummarizeOptions(
        window=config.window,
        table_name=config.table_name,
        source_file=args.source_file,
        output=args.output or job.output,
    )
    csv_text = summarize_sessions(options, config)
    write_stats_csv(csv_text, options.output, config)
    return 0


def _run_kinds_command() -> int:
    """Print every recognized item kind and its metadata prefix."""
    for kind in SessionEventKind:
        print(f"{kind.name}\t{kind.prefix}")
    return 0


def _add_summarize_command(subparsers: Any) -> None:
    """Register summarize subcommand."""
    parser = subparsers.add_parser(
        "summarize",
        help="Scan a time window and print one CSV row per session",
    )
    parser.add_argument("--job-file", help="Optional YAML job file with table, window, output")
    parser.add_argument("--table", help="Override SESSION_STATS_TABLE")
    parser.add_argument("--region", help="Override SESSION_STATS_REGION")
    parser.add_argument("--profile", help="Override SESSION_STATS_PROFILE")
    parser.add_argument(
        "--from",
        dest="window_start",
        help="Inclusive window start, e.g. 2022-03-01T00:00:00Z",
    )
    parser.add_argument(
        "--to",
        dest="window_end",
        help="Exclusive window end, e.g. 2022-04-01T00:00:00Z",
    )
    parser.add_argument(
        "--source-file",
        help="Replay items from a local JSONL dump instead of scanning DynamoDB",
    )
    parser.add_argument("--output", help="Local path or s3://bucket/key; stdout if omitted")


def _add_kinds_command(subparsers: Any) -> None:
    """Register kinds subcommand."""
    subparsers.add_parser("kinds", help="List recognized item kinds and metadata prefixes")
