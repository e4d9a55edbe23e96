"""Data access helpers for working with feedback items."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from feedback_stage.models.feedback import (
    FEEDBACK_STATE_ACTIVE,
    FEEDBACK_STATE_MERGED,
    Feedback,
)

__all__ = ["FeedbackRepository"]


class FeedbackRepository:
    """Thin wrapper around database access for feedback entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, feedback_id: str, *, for_update: bool = False) -> Feedback | None:
        """Return a feedback item by identifier.

        With ``for_update`` the row is locked until the surrounding
        transaction ends on backends that support ``SELECT ... FOR UPDATE``.
        """
        stmt = select(Feedback).where(Feedback.id == feedback_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def list_active(self) -> list[Feedback]:
        """Return every active (non-merged) feedback item ordered by id."""
        result = self.session.execute(
            select(Feedback)
            .where(Feedback.state == FEEDBACK_STATE_ACTIVE)
            .order_by(Feedback.id)
        )
        return list(result.scalars())

    def create(
        self,
        *,
        title: str,
        body: str = "",
        author_id: str | None = None,
        village_id: str | None = None,
    ) -> Feedback:
        """Insert a new active feedback item and return the persisted ORM instance."""
        feedback = Feedback(
            title=title,
            body=body,
            author_id=author_id,
            village_id=village_id,
            state=FEEDBACK_STATE_ACTIVE,
        )
        self.session.add(feedback)
        self.session.flush()
        return feedback

    def mark_merged(self, source_id: str, target_id: str) -> bool:
        """Flip ``source_id`` to merged if it is still active.

        The state test is part of the UPDATE itself, so of two racing
        merges only one can see a row count of 1.

        Returns:
            True if this call performed the transition.
        """
        result = self.session.execute(
            update(Feedback)
            .where(Feedback.id == source_id, Feedback.state == FEEDBACK_STATE_ACTIVE)
            .values(state=FEEDBACK_STATE_MERGED, duplicate_of_id=target_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1
