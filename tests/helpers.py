"""Assertion helpers shared by the test modules."""
from __future__ import annotations

from collections.abc import Iterable

from jose import jwt
from sqlalchemy.orm import Session

from feedback_stage.core.settings import settings
from feedback_stage.models import User, Vote


def votes_on(db_session: Session, feedback_id: str) -> list[Vote]:
    """Return the persisted votes on a feedback item, ordered by voter."""
    return (
        db_session.query(Vote)
        .filter(Vote.feedback_id == feedback_id)
        .order_by(Vote.user_id)
        .all()
    )


def user_ids(votes: Iterable[Vote]) -> set[str]:
    return {vote.user_id for vote in votes}


def auth_headers(user: User) -> dict[str, str]:
    """Return bearer headers the identity service would issue for ``user``."""
    token = jwt.encode({"sub": user.id}, settings.secret_key, algorithm=settings.jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}
