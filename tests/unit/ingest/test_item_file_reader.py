"""Unit tests for the local JSONL item reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import StatsSourceError
from core.types import ScanWindow
from ingest.item_file_reader import iter_file_batches
from tests.fixture_paths import item_dump

_WINDOW = ScanWindow(start="2022-03-01T00:00:00Z", end="2022-04-01T00:00:00Z")


def test_iter_file_batches_applies_window_and_tag_filter() -> None:
    """Out-of-window and non-session tags should be skipped."""
    batches = list(iter_file_batches(item_dump("march_sessions"), _WINDOW))
    session_ids = {item.session_id for batch in batches for item in batch}

    assert session_ids == {"s1", "s2", "s3"}


def test_iter_file_batches_splits_into_fixed_batches() -> None:
    """Items should be grouped by batch size while keeping file order."""
    batches = list(iter_file_batches(item_dump("march_sessions"), _WINDOW, batch_size=4))

    assert [len(batch) for batch in batches] == [4, 4, 2]
    assert batches[0][0].metadata == "SESSION" and batches[0][0].market == "US"


def test_iter_file_batches_raises_for_missing_file(tmp_path: Path) -> None:
    """Reader should fail when the dump does not exist."""
    with pytest.raises(StatsSourceError):
        list(iter_file_batches(str(tmp_path / "absent.jsonl"), _WINDOW))


def test_iter_file_batches_raises_for_missing_field() -> None:
    """Rows without metadata should be rejected."""
    with pytest.raises(StatsSourceError, match="metadata"):
        list(iter_file_batches(item_dump("missing_field"), _WINDOW))


def test_iter_file_batches_raises_for_invalid_json(tmp_path: Path) -> None:
    """Malformed lines should fail with their line number."""
    dump_path = tmp_path / "items.jsonl"
    dump_path.write_text('{"id": "s1",\n', encoding="utf-8")

    with pytest.raises(StatsSourceError, match=":1"):
        list(iter_file_batches(str(dump_path), _WINDOW))


def test_iter_file_batches_keeps_window_start_and_drops_window_end() -> None:
    """The window is half-open: start is kept, end is dropped."""
    batches = list(iter_file_batches(item_dump("window_edges"), _WINDOW))
    session_ids = [item.session_id for batch in batches for item in batch]

    assert session_ids == ["first", "last"]
