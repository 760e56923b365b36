"""Unit tests for CSV rendering and delivery."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import StatsConfig
from core.errors import StatsExportError
from core.types import SessionStats
from store import csv_export
from store.csv_export import render_stats_csv, write_stats_csv

_HEADER = (
    "id,market,no_of_assign_attempts,created_at,created_by_role,"
    "rejected_at,rejected_reason,closed_at,closed_reason,confirmed_at"
)


def _config() -> StatsConfig:
    return StatsConfig(
        table_name="session",
        region="eu-west-1",
        profile=None,
        window_start="2022-03-01T00:00:00Z",
        window_end="2022-04-01T00:00:00Z",
    )


class _FakeS3Client:
    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []

    def put_object(self, **kwargs: object) -> None:
        self.calls.append(kwargs)


def test_render_stats_csv_writes_header_and_empty_fields() -> None:
    """Unset fields should render as empty cells."""
    stats = SessionStats(
        session_id="s1",
        market="US",
        assign_attempts=2,
        created_at="T1",
        created_by_role="USER",
        confirmed_at="T4",
    )

    csv_text = render_stats_csv({"s1": stats})

    assert csv_text == f"{_HEADER}\ns1,US,2,T1,USER,,,,,T4\n"


def test_render_stats_csv_orders_rows_by_session_id() -> None:
    """Rows should be stable regardless of mapping order."""
    stats_by_id = {"s2": SessionStats(session_id="s2"), "s1": SessionStats(session_id="s1")}

    rows = render_stats_csv(stats_by_id).splitlines()

    assert [row.split(",")[0] for row in rows[1:]] == ["s1", "s2"]


def test_render_stats_csv_for_no_sessions_is_header_only() -> None:
    """An empty window should still render the header row."""
    assert render_stats_csv({}) == f"{_HEADER}\n"


def test_write_stats_csv_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    """Without a destination the table should go to stdout."""
    write_stats_csv("id\ns1\n", None, _config())

    assert capsys.readouterr().out == "id\ns1\n"


def test_write_stats_csv_creates_local_file(tmp_path: Path) -> None:
    """Local destinations should be written with parent dirs created."""
    destination = tmp_path / "reports" / "march.csv"

    write_stats_csv("id\ns1\n", str(destination), _config())

    assert destination.read_text(encoding="utf-8") == "id\ns1\n"


def test_write_stats_csv_uploads_to_s3(monkeypatch: pytest.MonkeyPatch) -> None:
    """S3 destinations should be uploaded as one object."""
    fake_client = _FakeS3Client()
    monkeypatch.setattr(csv_export, "create_s3_client", lambda config: fake_client)

    write_stats_csv("id\ns1\n", "s3://reports/sessions/march.csv", _config())

    assert fake_client.calls[0]["Bucket"] == "reports"
    assert fake_client.calls[0]["Key"] == "sessions/march.csv"
    assert fake_client.calls[0]["Body"] == b"id\ns1\n"


def test_write_stats_csv_rejects_s3_uri_without_key() -> None:
    """S3 destinations must name an object key."""
    with pytest.raises(StatsExportError):
        write_stats_csv("id\n", "s3://reports", _config())


def test_write_stats_csv_wraps_unknown_profile(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """S3 client creation failures should surface as export errors."""
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
    config = StatsConfig(
        table_name="session",
        region="eu-west-1",
        profile="no-such-profile",
        window_start="2022-03-01T00:00:00Z",
        window_end="2022-04-01T00:00:00Z",
    )

    with pytest.raises(StatsExportError, match="no-such-profile"):
        write_stats_csv("id\ns1\n", "s3://reports/sessions/march.csv", config)
