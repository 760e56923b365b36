"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import StatsConfig, build_scan_window
from core.errors import StatsConfigError


def test_from_env_uses_defaults() -> None:
    """Config should fall back to the session table and March 2022 window."""
    config = StatsConfig.from_env()

    assert (config.table_name, config.region, config.page_size) == ("session", "eu-west-1", None)
    assert config.window.start == "2022-03-01T00:00:00Z"


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read table, window, and page size from environment."""
    monkeypatch.setenv("SESSION_STATS_TABLE", "session-staging")
    monkeypatch.setenv("SESSION_STATS_WINDOW_START", "2023-01-01T00:00:00Z")
    monkeypatch.setenv("SESSION_STATS_WINDOW_END", "2023-02-01T00:00:00Z")
    monkeypatch.setenv("SESSION_STATS_PAGE_SIZE", "250")

    config = StatsConfig.from_env()

    assert config.table_name == "session-staging" and config.page_size == 250
    assert config.window.end == "2023-02-01T00:00:00Z"


def test_from_env_raises_for_invalid_page_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric page size."""
    monkeypatch.setenv("SESSION_STATS_PAGE_SIZE", "lots")

    with pytest.raises(StatsConfigError):
        StatsConfig.from_env()


def test_from_env_raises_for_zero_page_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-positive page size."""
    monkeypatch.setenv("SESSION_STATS_PAGE_SIZE", "0")

    with pytest.raises(StatsConfigError):
        StatsConfig.from_env()


def test_build_scan_window_rejects_reversed_bounds() -> None:
    """Window start must come before window end."""
    with pytest.raises(StatsConfigError):
        build_scan_window("2022-04-01T00:00:00Z", "2022-03-01T00:00:00Z")


def test_build_scan_window_rejects_non_iso_timestamp() -> None:
    """Window bounds must be ISO-8601 timestamps."""
    with pytest.raises(StatsConfigError):
        build_scan_window("last tuesday", "2022-03-01T00:00:00Z")


def test_build_scan_window_accepts_naive_bound() -> None:
    """A bound without offset should compare as UTC."""
    window = build_scan_window("2022-03-01T00:00:00", "2022-04-01T00:00:00Z")

    assert window.contains("2022-03-15T00:00:00Z")


def test_boto3_session_kwargs_include_profile_when_set() -> None:
    """Session kwargs should carry region and optional profile."""
    config = StatsConfig(
        table_name="session",
        region="eu-west-1",
        profile="analytics",
        window_start="2022-03-01T00:00:00Z",
        window_end="2022-04-01T00:00:00Z",
    )

    kwargs = config.boto3_session_kwargs()

    assert kwargs == {"region_name": "eu-west-1", "profile_name": "analytics"}


def test_build_scan_window_normalizes_offset_bound_to_utc() -> None:
    """Offset-bearing bounds should be rewritten as UTC Z timestamps."""
    window = build_scan_window("2022-03-02T14:00:00+05:00", "2022-03-02T10:00:00Z")

    assert window.start == "2022-03-02T09:00:00Z"
    assert window.contains("2022-03-02T09:30:00Z")


def test_build_scan_window_expands_date_only_bound() -> None:
    """Date-only bounds should start at UTC midnight."""
    window = build_scan_window("2022-03-01", "2022-04-01")

    assert (window.start, window.end) == ("2022-03-01T00:00:00Z", "2022-04-01T00:00:00Z")
    assert window.contains("2022-03-01T00:00:00Z")
    assert not window.contains("2022-04-01T00:00:00Z")


def test_from_env_defers_window_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    """An invalid env window should only fail once the window is resolved."""
    monkeypatch.setenv("SESSION_STATS_WINDOW_START", "garbage")

    config = StatsConfig.from_env()

    with pytest.raises(StatsConfigError, match="garbage"):
        _ = config.window
