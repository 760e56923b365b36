"""CSV rendering and delivery for session stats.

This module renders the finished stats mapping as one CSV table and
writes it to stdout, a local file, or an S3 object.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
import sys
from typing import Any, Mapping

import boto3

from core.config import StatsConfig
from core.constants import CSV_COLUMNS
from core.errors import StatsExportError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri
from core.types import SessionStats

_LOGGER = get_logger(__name__)


def render_stats_csv(stats_by_id: Mapping[str, SessionStats]) -> str:
    """Render session stats as CSV text with a header row.

    Args:
        stats_by_id: Session id to stats mapping.

    Returns:
        CSV text, one row per session ordered by session id.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for session_id in sorted(stats_by_id):
        writer.writerow(_stats_to_row(stats_by_id[session_id]))
    return buffer.getvalue()


def write_stats_csv(csv_text: str, destination: str | None, config: StatsConfig) -> None:
    """Write rendered CSV to its destination.

    Args:
        csv_text: Fully rendered CSV table.
        destination: Local path, ``s3://bucket/key`` URI, or None for stdout.
        config: Runtime config for S3 session defaults.

    Raises:
        StatsExportError: If the destination cannot be written.
    """
    if destination is None:
        sys.stdout.write(csv_text)
        sys.stdout.flush()
        return
    if destination.startswith("s3://"):
        _upload_csv(csv_text, destination, config)
    else:
        _write_local_csv(csv_text, Path(destination).expanduser())
    _LOGGER.info("stats_exported", destination=destination, bytes=len(csv_text))


def _stats_to_row(stats: SessionStats) -> dict[str, str | int]:
    return {
        "id": stats.session_id,
        "market": stats.market,
        "no_of_assign_attempts": stats.assign_attempts,
        "created_at": stats.created_at,
        "created_by_role": stats.created_by_role,
        "rejected_at": stats.rejected_at,
        "rejected_reason": stats.rejected_reason,
        "closed_at": stats.closed_at,
        "closed_reason": stats.closed_reason,
        "confirmed_at": stats.confirmed_at,
    }


def _write_local_csv(csv_text: str, output_path: Path) -> None:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(csv_text, encoding="utf-8")
    except OSError as error:
        raise StatsExportError(
            f"Failed to write stats CSV to {output_path}: {error}. "
            "Check the output directory permissions and rerun."
        ) from error


def _upload_csv(csv_text: str, destination: str, config: StatsConfig) -> None:
    location = parse_s3_uri(destination)
    try:
        s3_client = create_s3_client(config)
        s3_client.put_object(
            Bucket=location.bucket,
            Key=location.key,
            Body=csv_text.encode("utf-8"),
            ContentType="text/csv",
        )
    except Exception as error:
        raise StatsExportError(
            f"Failed to upload stats CSV to {destination}: {error}. "
            "Check AWS credentials and bucket permissions, then rerun."
        ) from error


def create_s3_client(config: StatsConfig) -> Any:
    """Create boto3 S3 client for exports.

    Args:
        config: Runtime config with region and optional profile.

    Returns:
        Boto3 S3 client.
    """
    session = boto3.session.Session(**config.boto3_session_kwargs())
    return session.client("s3")
