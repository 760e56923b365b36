"""Runtime configuration model for session-stats.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import os

from core.constants import (
    DEFAULT_REGION,
    DEFAULT_TABLE_NAME,
    DEFAULT_WINDOW_END,
    DEFAULT_WINDOW_START,
    UTC_TIMESTAMP_FORMAT,
)
from core.errors import StatsConfigError
from core.types import ScanWindow


@dataclass(frozen=True)
class StatsConfig:
    """Validated runtime configuration.

    Attributes:
        table_name: DynamoDB table holding snapshots and domain events.
        region: AWS region for the boto3 session.
        profile: Optional AWS profile for boto3 session initialization.
        window_start: Inclusive lower bound on item ``createdAt``.
        window_end: Exclusive upper bound on item ``createdAt``.
        page_size: Optional DynamoDB scan page size.
    """

    table_name: str
    region: str
    profile: str | None
    window_start: str
    window_end: str
    page_size: int | None = None

    @classmethod
    def from_env(cls) -> "StatsConfig":
        """Build config from process environment variables.

        Window bounds are kept raw here and validated by ``window`` once
        job file and CLI overrides have been layered on top.

        Returns:
            A config object.

        Raises:
            StatsConfigError: If the page size is invalid.
        """
        page_size_value = os.getenv("SESSION_STATS_PAGE_SIZE")
        return cls(
            table_name=os.getenv("SESSION_STATS_TABLE", DEFAULT_TABLE_NAME),
            region=os.getenv("SESSION_STATS_REGION", DEFAULT_REGION),
            profile=os.getenv("SESSION_STATS_PROFILE"),
            window_start=os.getenv("SESSION_STATS_WINDOW_START", DEFAULT_WINDOW_START),
            window_end=os.getenv("SESSION_STATS_WINDOW_END", DEFAULT_WINDOW_END),
            page_size=_parse_page_size(page_size_value) if page_size_value else None,
        )

    @property
    def window(self) -> ScanWindow:
        """Return the validated, UTC-normalized scan window.

        Raises:
            StatsConfigError: If a bound is invalid or start is not before end.
        """
        return build_scan_window(self.window_start, self.window_end)

    def boto3_session_kwargs(self) -> dict[str, str]:
        """Build boto3 Session kwargs from region and optional profile."""
        kwargs: dict[str, str] = {"region_name": self.region}
        if self.profile:
            kwargs["profile_name"] = self.profile
        return kwargs


def build_scan_window(start: str, end: str) -> ScanWindow:
    """Validate window bounds and build a scan window.

    Args:
        start: Inclusive ISO-8601 lower bound.
        end: Exclusive ISO-8601 upper bound.

    Bounds are rewritten as UTC ``YYYY-MM-DDTHH:MM:SSZ`` strings so that
    lexical comparison against item timestamps matches time order.

    Returns:
        Validated half-open window.

    Raises:
        StatsConfigError: If a bound is not ISO-8601 or start is not before end.
    """
    start_at = _parse_timestamp(start, "window start")
    end_at = _parse_timestamp(end, "window end")
    if start_at >= end_at:
        raise StatsConfigError(
            f"Invalid scan window [{start}, {end}): start must be before end. "
            "Swap the bounds or widen the window."
        )
    return ScanWindow(start=_format_utc(start_at), end=_format_utc(end_at))


def _format_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(UTC_TIMESTAMP_FORMAT)


def _parse_timestamp(raw_value: str, label: str) -> datetime:
    """Parse an ISO-8601 timestamp with optional ``Z`` suffix.

    Args:
        raw_value: Raw timestamp string.
        label: Human-readable name for error messages.

    Returns:
        Parsed datetime.

    Raises:
        StatsConfigError: If value is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(raw_value.replace("Z", "+00:00"))
    except ValueError as error:
        raise StatsConfigError(
            f"Invalid {label} '{raw_value}': expected ISO-8601 timestamp "
            "such as 2022-03-01T00:00:00Z."
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_page_size(raw_value: str) -> int:
    """Parse the scan page size environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive page size.

    Raises:
        StatsConfigError: If value is not a positive integer.
    """
    try:
        page_size = int(raw_value)
    except ValueError as error:
        raise StatsConfigError(
            "Invalid SESSION_STATS_PAGE_SIZE value: "
            f"expected integer, got '{raw_value}'. "
            "Set SESSION_STATS_PAGE_SIZE to a positive number."
        ) from error
    if page_size < 1:
        raise StatsConfigError(
            f"Invalid SESSION_STATS_PAGE_SIZE value {page_size}: expected value >= 1."
        )
    return page_size
