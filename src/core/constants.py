"""Core constants used across session-stats modules.

This module centralizes table, column and default values.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_TABLE_NAME = "session"
DEFAULT_REGION = "eu-west-1"
DEFAULT_WINDOW_START = "2022-03-01T00:00:00Z"
DEFAULT_WINDOW_END = "2022-04-01T00:00:00Z"
DEFAULT_FILE_BATCH_SIZE = 100

ID_ATTRIBUTE = "id"
METADATA_ATTRIBUTE = "metadata"
CREATED_AT_ATTRIBUTE = "createdAt"
MARKET_ATTRIBUTE = "market"
PROJECTED_ATTRIBUTES = (ID_ATTRIBUTE, METADATA_ATTRIBUTE, CREATED_AT_ATTRIBUTE, MARKET_ATTRIBUTE)

SESSION_METADATA = "SESSION"
DOMAIN_EVENT_PREFIX = "DOMAINEVENT#"

CSV_COLUMNS = (
    "id",
    "market",
    "no_of_assign_attempts",
    "created_at",
    "created_by_role",
    "rejected_at",
    "rejected_reason",
    "closed_at",
    "closed_reason",
    "confirmed_at",
)
UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
