"""Data access helpers for working with votes."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from feedback_stage.models.vote import Vote

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for vote entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, vote_id: str) -> Vote | None:
        """Return a vote by identifier."""
        return self.session.get(Vote, vote_id)

    def get_for_user(self, feedback_id: str, user_id: str) -> Vote | None:
        """Return the vote a user cast on a feedback item, if any."""
        result = self.session.execute(
            select(Vote).where(Vote.feedback_id == feedback_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    def list_for_feedback(self, feedback_id: str) -> list[Vote]:
        """Return all votes on a feedback item in creation order."""
        result = self.session.execute(
            select(Vote)
            .where(Vote.feedback_id == feedback_id)
            .order_by(Vote.created_at, Vote.id)
        )
        return list(result.scalars())

    def voter_ids(self, feedback_id: str) -> set[str]:
        """Return the ids of every user who voted on a feedback item."""
        result = self.session.execute(select(Vote.user_id).where(Vote.feedback_id == feedback_id))
        return set(result.scalars())

    def create(
        self,
        *,
        feedback_id: str,
        user_id: str,
        weight: float,
        created_at: datetime | None = None,
    ) -> Vote:
        """Insert a vote and flush so the unique constraint is checked immediately.

        Args:
            feedback_id: Feedback item receiving the vote.
            user_id: Voter.
            weight: Base weight snapshotted at cast time.
            created_at: Original cast time; defaults to now. Migrated votes pass
                the source vote's timestamp so decay continues from it.

        Raises:
            sqlalchemy.exc.IntegrityError: If the user already voted on the item.
        """
        vote = Vote(feedback_id=feedback_id, user_id=user_id, weight=weight)
        if created_at is not None:
            vote.created_at = created_at
        self.session.add(vote)
        self.session.flush()
        return vote

    def delete(self, vote: Vote) -> None:
        """Remove a single vote."""
        self.session.delete(vote)
        self.session.flush()

    def delete_for_feedback(self, feedback_id: str) -> int:
        """Delete every vote on a feedback item and return how many were removed."""
        result = self.session.execute(
            delete(Vote)
            .where(Vote.feedback_id == feedback_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
