"""SQLAlchemy model for submitted feedback items."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from feedback_stage.db.ids import generate_id
from feedback_stage.db.session import Base
from feedback_stage.db.time import utcnow

FEEDBACK_STATE_ACTIVE = "active"
FEEDBACK_STATE_MERGED = "merged"


class Feedback(Base):
    """An idea submitted by a user and voted on by others.

    A feedback item starts ``active`` and may be merged exactly once into a
    canonical active item, after which ``duplicate_of_id`` points at it.
    """

    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("state IN ('active', 'merged')", name="ck_feedback_state"),
        CheckConstraint("duplicate_of_id IS NULL OR duplicate_of_id <> id", name="ck_feedback_not_self"),
        CheckConstraint(
            "(state = 'merged') = (duplicate_of_id IS NOT NULL)",
            name="ck_feedback_merged_has_target",
        ),
        Index("ix_feedback_state", "state"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: generate_id("fb"))
    author_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    state: Mapped[str] = mapped_column(String(16), nullable=False, default=FEEDBACK_STATE_ACTIVE)
    duplicate_of_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("feedback.id"),
        nullable=True,
    )

    village_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("village.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def is_merged(self) -> bool:
        """Return True once the item has been folded into another."""
        return self.state == FEEDBACK_STATE_MERGED
