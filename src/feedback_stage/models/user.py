# src/feedback_stage/models/user.py
"""SQLAlchemy models for voters and the reference data that weights their votes."""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_stage.db.ids import generate_id
from feedback_stage.db.session import Base


class Role(StrEnum):
    """Platform roles assigned by the identity service."""

    USER = "USER"
    PM = "PM"
    PO = "PO"
    RESEARCHER = "RESEARCHER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class VillagePriority(StrEnum):
    """Priority tier of a village."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Village(Base):
    """Reference data describing a product village and its priority tier."""

    __tablename__ = "village"
    __table_args__ = (
        CheckConstraint("priority IN ('high', 'medium', 'low')", name="ck_village_priority"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: generate_id("vil"))
    name: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=VillagePriority.MEDIUM.value,
    )


class User(Base):
    """Voter identity mirrored from the identity service."""

    __tablename__ = "app_user"
    __table_args__ = (
        CheckConstraint(
            "role IN ('USER', 'PM', 'PO', 'RESEARCHER', 'MODERATOR', 'ADMIN')",
            name="ck_app_user_role",
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: generate_id("usr"))
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=Role.USER.value)
    current_village_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("village.id", ondelete="SET NULL"),
        nullable=True,
    )

    memberships: Mapped[list[PanelMembership]] = relationship(
        "PanelMembership",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class PanelMembership(Base):
    """Enrollment of a user in a research panel."""

    __tablename__ = "panel_membership"

    panel_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Removed members keep their row with active = false.
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    user: Mapped[User] = relationship("User", back_populates="memberships")
