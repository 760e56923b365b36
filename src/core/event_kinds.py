"""Closed taxonomy of session table item kinds.

Each member's value is the metadata prefix that identifies it. Member
order is the match order: the first prefix that matches wins.
"""

from __future__ import annotations

from enum import Enum

from core.errors import StatsReduceError


class SessionEventKind(Enum):
    """Recognized item kinds keyed by metadata prefix."""

    SESSION_SNAPSHOT = "SESSION"
    CREATED_BY_USER = "DOMAINEVENT#SessionCreatedByUser"
    CREATED_BY_TUTOR = "DOMAINEVENT#SessionCreatedByTutor"
    CONFIRMED_BY_TUTOR = "DOMAINEVENT#SessionConfirmedByTutor"
    REJECTED_BY_USER = "DOMAINEVENT#SessionRejectedByUser"
    REJECTED_ON_MATCHING_TIMEOUT = "DOMAINEVENT#SessionRejectedOnMatchingTimeout"
    REJECTED_ON_NO_TUTORS = "DOMAINEVENT#SessionRejectedOnNoTutors"
    CLOSED_BY_TUTOR = "DOMAINEVENT#SessionClosedByTutor"
    CLOSED_BY_USER = "DOMAINEVENT#SessionClosedByUser"
    CLOSED_ON_TUTOR_DISCONNECTED = "DOMAINEVENT#SessionClosedOnTutorDisconnected"
    TUTOR_ASSIGNED = "DOMAINEVENT#TutorAssignedToSession"
    RATED_BY_USER = "DOMAINEVENT#SessionRatedByUser"
    REPORTED_BY_TUTOR = "DOMAINEVENT#SessionReportedByTutor"
    QUESTION_UPDATED = "DOMAINEVENT#QuestionUpdated"
    TUTOR_UNASSIGNED_ON_CONFIRMATION_TIMEOUT = (
        "DOMAINEVENT#TutorUnassignedFromSessionOnConfirmationTimeout"
    )
    TUTOR_UNASSIGNED_ON_TUTOR_DISCONNECTED = (
        "DOMAINEVENT#TutorUnassignedFromSessionOnTutorDisconnected"
    )

    @property
    def prefix(self) -> str:
        """Return the metadata prefix recognized for this kind."""
        return self.value


def classify_metadata(metadata: str) -> SessionEventKind:
    """Decode a raw metadata tag into its event kind.

    Args:
        metadata: Item metadata tag, possibly with trailing detail.

    Returns:
        First kind whose prefix matches the tag.

    Raises:
        StatsReduceError: If no known prefix matches.
    """
    for kind in SessionEventKind:
        if metadata.startswith(kind.prefix):
            return kind
    raise StatsReduceError(
        f"Unknown session item metadata '{metadata}'. "
        "Add the new event kind to SessionEventKind before rerunning."
    )
