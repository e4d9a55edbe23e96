"""Exceptions raised by the vote reconciliation services.

Every failure is typed so callers can tell a missing record apart from an
illegal state transition or a lost race on the vote uniqueness constraint.
"""

from __future__ import annotations


class FeedbackStageError(Exception):
    """Base exception for all service-level failures."""


class NotFoundError(FeedbackStageError, LookupError):
    """Raised when a referenced user, feedback item or vote does not exist."""

    resource = "Resource"

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}")


class UserNotFoundError(NotFoundError):
    """The user id does not resolve."""

    resource = "User"


class FeedbackNotFoundError(NotFoundError):
    """The feedback id does not resolve."""

    resource = "Feedback"


class VoteNotFoundError(NotFoundError):
    """The vote id, or the (user, feedback) pair, does not resolve."""

    resource = "Vote"


class InvalidStateError(FeedbackStageError):
    """Raised when a feedback item is in the wrong state for the operation."""


class AlreadyMergedError(InvalidStateError):
    """The merge source or target has already been merged."""


class FeedbackMergedError(InvalidStateError):
    """Votes cannot be cast on an item that was merged into another."""

    def __init__(self, feedback_id: str, canonical_id: str | None) -> None:
        self.feedback_id = feedback_id
        self.canonical_id = canonical_id
        super().__init__(
            f"Feedback {feedback_id} was merged into {canonical_id}; vote on the canonical item instead"
        )


class InvalidMergeError(FeedbackStageError, ValueError):
    """Raised when a merge request is malformed."""


class SelfMergeError(InvalidMergeError):
    """Source and target are the same item."""


class CircularMergeError(InvalidMergeError):
    """The target is already recorded as a duplicate of the source."""


class ConstraintViolationError(FeedbackStageError):
    """Raised when a write breaks a storage-level uniqueness rule."""


class DuplicateVoteError(ConstraintViolationError):
    """The user already has a vote on this feedback item."""


class VoteConstraintViolationError(ConstraintViolationError):
    """A concurrent writer inserted the same (feedback, user) vote first."""
