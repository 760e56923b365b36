"""Local JSONL replay source for session items.

This module reads a plain-JSON dump of the session table and applies
the same window and metadata filter that the DynamoDB scan applies.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

from core.constants import (
    CREATED_AT_ATTRIBUTE,
    DEFAULT_FILE_BATCH_SIZE,
    DOMAIN_EVENT_PREFIX,
    ID_ATTRIBUTE,
    MARKET_ATTRIBUTE,
    METADATA_ATTRIBUTE,
    SESSION_METADATA,
)
from core.errors import StatsSourceError
from core.types import ScanWindow, SessionItem


def iter_file_batches(
    source_path: str,
    window: ScanWindow,
    batch_size: int = DEFAULT_FILE_BATCH_SIZE,
) -> Iterator[list[SessionItem]]:
    """Yield matching items from a JSONL dump in fixed-size batches.

    Args:
        source_path: Path to a JSONL file with one item object per line.
        window: Half-open window on item ``createdAt``.
        batch_size: Maximum items per yielded batch.

    Yields:
        Items in file order, grouped into batches.

    Raises:
        StatsSourceError: If the file is missing or a line is invalid.
    """
    file_path = Path(source_path).expanduser()
    if not file_path.is_file():
        raise StatsSourceError(
            f"Failed to read items at {file_path}: file does not exist. "
            "Provide an existing JSONL dump of the session table."
        )
    batch: list[SessionItem] = []
    with file_path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, 1):
            if not line.strip():
                continue
            item = _parse_item_line(file_path, line, line_number)
            if not _is_selected(item, window):
                continue
            batch.append(item)
            if len(batch) >= batch_size:
                yield batch
                batch = []
    if batch:
        yield batch


def _parse_item_line(file_path: Path, line: str, line_number: int) -> SessionItem:
    """Parse and validate one JSONL item row.

    Args:
        file_path: Parent file path for context.
        line: Raw JSON text line.
        line_number: One-based line number.

    Returns:
        Parsed session item.

    Raises:
        StatsSourceError: If line is invalid.
    """
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise StatsSourceError(
            f"Failed to parse item at {file_path}:{line_number}: "
            f"{error.msg}. Fix the JSON syntax and rerun."
        ) from error
    if not isinstance(payload, dict):
        raise StatsSourceError(
            f"Invalid item at {file_path}:{line_number}: expected a JSON object."
        )
    missing = [
        name
        for name in (ID_ATTRIBUTE, METADATA_ATTRIBUTE, CREATED_AT_ATTRIBUTE)
        if not isinstance(payload.get(name), str)
    ]
    if missing:
        raise StatsSourceError(
            f"Invalid item at {file_path}:{line_number}: "
            f"expected string fields {missing}."
        )
    return SessionItem(
        session_id=payload[ID_ATTRIBUTE],
        metadata=payload[METADATA_ATTRIBUTE],
        created_at=payload[CREATED_AT_ATTRIBUTE],
        market=str(payload.get(MARKET_ATTRIBUTE) or ""),
    )


def _is_selected(item: SessionItem, window: ScanWindow) -> bool:
    """Return whether the scan filter would keep this item."""
    if not window.contains(item.created_at):
        return False
    return item.metadata == SESSION_METADATA or item.metadata.startswith(DOMAIN_EVENT_PREFIX)
