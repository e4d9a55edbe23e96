"""Read-side vote aggregation for feedback items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from feedback_stage.db.time import utcnow
from feedback_stage.repositories import VoteRepository
from feedback_stage.services.decay import current_weight
from feedback_stage.services.errors import VoteNotFoundError


@dataclass(frozen=True)
class VoteStats:
    """Summary of the votes on one feedback item."""

    count: int = 0
    total_weight: float = 0.0
    total_decayed_weight: float = 0.0


def vote_stats(db: Session, feedback_id: str, now: datetime | None = None) -> VoteStats:
    """Count the votes on a feedback item and sum their base and decayed weights.

    All votes are decayed against the same instant so the totals are
    consistent with each other.
    """
    votes = VoteRepository(db).list_for_feedback(feedback_id)
    if not votes:
        return VoteStats()

    reference = now if now is not None else utcnow()
    return VoteStats(
        count=len(votes),
        total_weight=sum(vote.weight for vote in votes),
        total_decayed_weight=sum(current_weight(vote.weight, vote.created_at, reference) for vote in votes),
    )


def has_voted(db: Session, user_id: str, feedback_id: str) -> bool:
    """Return True if the user has a vote on the feedback item."""
    return VoteRepository(db).get_for_user(feedback_id, user_id) is not None


def calculate_current_weight(db: Session, vote_id: str, now: datetime | None = None) -> float:
    """Return the decayed weight of a stored vote.

    Raises:
        VoteNotFoundError: If the vote does not exist.
    """
    vote = VoteRepository(db).get_by_id(vote_id)
    if vote is None:
        raise VoteNotFoundError(vote_id)
    return current_weight(vote.weight, vote.created_at, now)
