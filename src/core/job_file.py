"""Typed YAML job files for session-stats runs.

A job file pins the table, region, window, and output destination of a
recurring export so it can be rerun without repeating CLI flags.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import UTC_TIMESTAMP_FORMAT
from core.errors import StatsJobFileError

_ROOT_KEYS = {"table", "region", "profile", "window", "output"}
_WINDOW_KEYS = {"start", "end"}


@dataclass(frozen=True)
class JobFile:
    """Validated job file; unset fields fall back to env config."""

    table_name: str | None = None
    region: str | None = None
    profile: str | None = None
    window_start: str | None = None
    window_end: str | None = None
    output: str | None = None


def load_job_file(job_path: str) -> JobFile:
    """Load and validate a YAML job file from disk.

    Args:
        job_path: File path to YAML job file.

    Returns:
        Validated job file values.

    Raises:
        StatsJobFileError: If file is unreadable or schema checks fail.
    """
    payload = _load_yaml_payload(job_path)
    root_mapping = _string_keyed(payload, "job file root")
    _validate_keys(root_mapping, _ROOT_KEYS, "job file")
    window_start, window_end = _parse_window(root_mapping.get("window"))
    return JobFile(
        table_name=_optional_text(root_mapping, "table"),
        region=_optional_text(root_mapping, "region"),
        profile=_optional_text(root_mapping, "profile"),
        window_start=window_start,
        window_end=window_end,
        output=_optional_text(root_mapping, "output"),
    )


def _load_yaml_payload(job_path: str) -> object:
    job_file = Path(job_path).expanduser().resolve()
    if not job_file.exists():
        raise StatsJobFileError(
            f"Job file does not exist at {job_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(job_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise StatsJobFileError(
            f"Failed to read job file at {job_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise StatsJobFileError(
            f"Failed to parse YAML job file at {job_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise StatsJobFileError(f"Job file at {job_file} is empty. Define at least 'window'.")
    return payload


def _string_keyed(value: object, context: str) -> dict[str, object]:
    if not isinstance(value, Mapping):
        raise StatsJobFileError(
            f"Invalid {context}: expected a YAML mapping, got {type(value).__name__}. "
            "Use 'key: value' entries."
        )
    bad_keys = [repr(key) for key in value if not isinstance(key, str)]
    if bad_keys:
        raise StatsJobFileError(
            f"Invalid {context}: keys {', '.join(bad_keys)} are not strings. Quote them."
        )
    return dict(value)


def _parse_window(raw_window: object) -> tuple[str | None, str | None]:
    if raw_window is None:
        return None, None
    window_mapping = _string_keyed(raw_window, "job file window")
    _validate_keys(window_mapping, _WINDOW_KEYS, "job file window")
    return (
        _optional_timestamp(window_mapping, "start"),
        _optional_timestamp(window_mapping, "end"),
    )


def _optional_timestamp(mapping: Mapping[str, object], field_name: str) -> str | None:
    # Unquoted YAML timestamps load as datetime, date-only values as date.
    raw_value = mapping.get(field_name)
    if isinstance(raw_value, datetime):
        moment = raw_value if raw_value.tzinfo else raw_value.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc).strftime(UTC_TIMESTAMP_FORMAT)
    if isinstance(raw_value, date):
        midnight = datetime.combine(raw_value, time(), tzinfo=timezone.utc)
        return midnight.strftime(UTC_TIMESTAMP_FORMAT)
    return _optional_text(mapping, field_name)


def _optional_text(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if not isinstance(raw_value, str):
        raise StatsJobFileError(
            f"Job file field '{field_name}' has type {type(raw_value).__name__}. "
            "Write it as a string."
        )
    return raw_value.strip() or None


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise StatsJobFileError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
