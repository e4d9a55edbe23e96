"""initial vote schema

Revision ID: 5c2e81d0a4b7
Revises:
Create Date: 2026-10-17 09:12:44.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c2e81d0a4b7"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create reference, feedback, vote and event tables."""
    op.create_table(
        "village",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(length=16), nullable=False),
        sa.CheckConstraint("priority IN ('high', 'medium', 'low')", name="ck_village_priority"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("current_village_id", sa.String(length=64), nullable=True),
        sa.CheckConstraint(
            "role IN ('USER', 'PM', 'PO', 'RESEARCHER', 'MODERATOR', 'ADMIN')",
            name="ck_app_user_role",
        ),
        sa.ForeignKeyConstraint(["current_village_id"], ["village.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "panel_membership",
        sa.Column("panel_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("panel_id", "user_id"),
    )
    op.create_table(
        "feedback",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("author_id", sa.String(length=64), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False),
        sa.Column("duplicate_of_id", sa.String(length=64), nullable=True),
        sa.Column("village_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("state IN ('active', 'merged')", name="ck_feedback_state"),
        sa.CheckConstraint(
            "duplicate_of_id IS NULL OR duplicate_of_id <> id",
            name="ck_feedback_not_self",
        ),
        sa.CheckConstraint(
            "(state = 'merged') = (duplicate_of_id IS NOT NULL)",
            name="ck_feedback_merged_has_target",
        ),
        sa.ForeignKeyConstraint(["author_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["duplicate_of_id"], ["feedback.id"]),
        sa.ForeignKeyConstraint(["village_id"], ["village.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feedback_state", "feedback", ["state"])
    op.create_table(
        "vote",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("feedback_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["feedback_id"], ["feedback.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("feedback_id", "user_id", name="uq_vote_feedback_user"),
    )
    op.create_index("ix_vote_feedback_id", "vote", ["feedback_id"])
    op.create_table(
        "event",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_type", "event", ["type"])


def downgrade() -> None:
    """Drop all vote schema tables."""
    op.drop_index("ix_event_type", table_name="event")
    op.drop_table("event")
    op.drop_index("ix_vote_feedback_id", table_name="vote")
    op.drop_table("vote")
    op.drop_index("ix_feedback_state", table_name="feedback")
    op.drop_table("feedback")
    op.drop_table("panel_membership")
    op.drop_table("app_user")
    op.drop_table("village")
