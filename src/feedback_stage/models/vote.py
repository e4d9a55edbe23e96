# src/feedback_stage/models/vote.py
"""Models capturing voting interactions on feedback."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from feedback_stage.db.ids import generate_id
from feedback_stage.db.session import Base
from feedback_stage.db.time import utcnow


class Vote(Base):
    """Per-user vote on a feedback item.

    The weight is the base weight computed when the vote was cast. It is never
    rewritten; readers apply time decay on the fly.
    """

    __tablename__ = "vote"
    __table_args__ = (
        # One vote per user per feedback item, enforced by the database.
        UniqueConstraint("feedback_id", "user_id", name="uq_vote_feedback_user"),
        Index("ix_vote_feedback_id", "feedback_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: generate_id("vote"))
    feedback_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("feedback.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
