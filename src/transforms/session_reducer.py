"""Fold session table items into per-session lifecycle stats.

Every item kind maps to exactly one effect. Effects mutate the given
``SessionStats`` in place and touch nothing else; a later milestone item
of the same kind overwrites the earlier value.
"""

from __future__ import annotations

from typing import Callable

from core.errors import StatsReduceError
from core.event_kinds import SessionEventKind, classify_metadata
from core.types import SessionItem, SessionStats

ItemEffect = Callable[[SessionStats, SessionItem], None]


def apply_session_item(stats: SessionStats, item: SessionItem) -> None:
    """Apply one item's effect to its session stats.

    Args:
        stats: Mutable stats of the session that owns ``item``.
        item: Raw table item.

    Raises:
        StatsReduceError: If the item metadata matches no known kind.
    """
    try:
        kind = classify_metadata(item.metadata)
    except StatsReduceError as error:
        raise StatsReduceError(
            f"Cannot reduce item for session '{item.session_id}': {error}"
        ) from error
    ITEM_EFFECTS[kind](stats, item)


def _set_market(stats: SessionStats, item: SessionItem) -> None:
    stats.market = item.market


def _created_by(role: str) -> ItemEffect:
    def effect(stats: SessionStats, item: SessionItem) -> None:
        stats.created_at = item.created_at
        stats.created_by_role = role

    return effect


def _rejected(reason: str) -> ItemEffect:
    def effect(stats: SessionStats, item: SessionItem) -> None:
        stats.rejected_at = item.created_at
        stats.rejected_reason = reason

    return effect


def _closed(reason: str) -> ItemEffect:
    def effect(stats: SessionStats, item: SessionItem) -> None:
        stats.closed_at = item.created_at
        stats.closed_reason = reason

    return effect


def _set_confirmed(stats: SessionStats, item: SessionItem) -> None:
    stats.confirmed_at = item.created_at


def _count_assignment(stats: SessionStats, item: SessionItem) -> None:
    stats.assign_attempts += 1


def _ignore(stats: SessionStats, item: SessionItem) -> None:
    """Recognized kind that does not affect the summary."""


ITEM_EFFECTS: dict[SessionEventKind, ItemEffect] = {
    SessionEventKind.SESSION_SNAPSHOT: _set_market,
    SessionEventKind.CREATED_BY_USER: _created_by("USER"),
    SessionEventKind.CREATED_BY_TUTOR: _created_by("TUTOR"),
    SessionEventKind.CONFIRMED_BY_TUTOR: _set_confirmed,
    SessionEventKind.REJECTED_BY_USER: _rejected("user"),
    SessionEventKind.REJECTED_ON_MATCHING_TIMEOUT: _rejected("matching_timeout"),
    SessionEventKind.REJECTED_ON_NO_TUTORS: _rejected("no_tutors"),
    SessionEventKind.CLOSED_BY_TUTOR: _closed("tutor"),
    SessionEventKind.CLOSED_BY_USER: _closed("user"),
    SessionEventKind.CLOSED_ON_TUTOR_DISCONNECTED: _closed("tutor_disconnected"),
    SessionEventKind.TUTOR_ASSIGNED: _count_assignment,
    SessionEventKind.RATED_BY_USER: _ignore,
    SessionEventKind.REPORTED_BY_TUTOR: _ignore,
    SessionEventKind.QUESTION_UPDATED: _ignore,
    SessionEventKind.TUTOR_UNASSIGNED_ON_CONFIRMATION_TIMEOUT: _ignore,
    SessionEventKind.TUTOR_UNASSIGNED_ON_TUTOR_DISCONNECTED: _ignore,
}
