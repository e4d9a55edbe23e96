"""Read-only access to users, villages and panel memberships.

These rows are owned by the identity and administration services; this
service only reads them to weight votes.
"""
from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from feedback_stage.models.user import PanelMembership, User, Village

__all__ = ["IdentityRepository"]


class IdentityRepository:
    """Lookups for voter identity and the reference data attached to it."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_user(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_village(self, village_id: str) -> Village | None:
        """Return a village by identifier."""
        return self.session.get(Village, village_id)

    def has_active_membership(self, user_id: str) -> bool:
        """Return True if the user belongs to at least one active panel."""
        stmt = select(
            exists().where(
                PanelMembership.user_id == user_id,
                PanelMembership.active.is_(True),
            )
        )
        return bool(self.session.execute(stmt).scalar())
