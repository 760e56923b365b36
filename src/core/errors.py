"""Session-stats exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of the job raises a specific error type for debuggability.
"""

from __future__ import annotations


class StatsError(Exception):
    """Base exception for all session-stats failures."""


class StatsConfigError(StatsError):
    """Raised for invalid runtime configuration."""


class StatsJobFileError(StatsError):
    """Raised for invalid or unreadable YAML job files."""


class StatsSourceError(StatsError):
    """Raised when session items cannot be retrieved."""


class StatsReduceError(StatsError):
    """Raised when an item cannot be folded into session stats."""


class StatsExportError(StatsError):
    """Raised when rendered stats cannot be written."""
