"""Append-only audit events for votes and merges."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from feedback_stage.db.session import Base
from feedback_stage.db.time import utcnow

EVENT_VOTE_CAST = "vote.cast"
EVENT_VOTE_REMOVED = "vote.removed"
EVENT_FEEDBACK_MERGED = "feedback.merged"


class Event(Base):
    """Audit record written in the same transaction as the change it describes."""

    __tablename__ = "event"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # Actor, when known. Not a foreign key so the trail survives user deletion.
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
