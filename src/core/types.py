"""Shared typed models.

This module defines the raw item, per-session summary, and option
models used by the reader, reducer, export, and CLI layers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionItem:
    """One projected row from the session table.

    Attributes:
        session_id: Identifier of the owning session.
        metadata: Tag marking the row as snapshot or domain event.
        created_at: ISO-8601 timestamp of the row.
        market: Market label, only populated on snapshot rows.
    """

    session_id: str
    metadata: str
    created_at: str
    market: str = ""


@dataclass
class SessionStats:
    """Mutable lifecycle summary accumulated for one session.

    Attributes:
        session_id: Session identifier.
        market: Market label from the session snapshot.
        assign_attempts: Number of tutor assignment events seen.
        created_at: Creation event timestamp.
        created_by_role: Role that created the session (USER or TUTOR).
        rejected_at: Rejection event timestamp.
        rejected_reason: Rejection cause code.
        closed_at: Close event timestamp.
        closed_reason: Close cause code.
        confirmed_at: Tutor confirmation timestamp.
    """

    session_id: str
    market: str = ""
    assign_attempts: int = 0
    created_at: str = ""
    created_by_role: str = ""
    rejected_at: str = ""
    rejected_reason: str = ""
    closed_at: str = ""
    closed_reason: str = ""
    confirmed_at: str = ""


@dataclass(frozen=True)
class ScanWindow:
    """Half-open ``[start, end)`` window on item ``created_at``."""

    start: str
    end: str

    def contains(self, timestamp: str) -> bool:
        """Return whether a timestamp falls inside the window."""
        return self.start <= timestamp < self.end


@dataclass(frozen=True)
class SummarizeOptions:
    """Summarize command options.

    Attributes:
        window: Time window applied to item timestamps.
        table_name: DynamoDB table to scan.
        source_file: Optional local JSONL dump replayed instead of a scan.
        output: Optional destination path or ``s3://`` URI; stdout if omitted.
    """

    window: ScanWindow
    table_name: str
    source_file: str | None = None
    output: str | None = None
