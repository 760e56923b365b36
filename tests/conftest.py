"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop session-stats and AWS profile env vars so tests see defaults."""
    for name in list(os.environ):
        if name.startswith("SESSION_STATS_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
