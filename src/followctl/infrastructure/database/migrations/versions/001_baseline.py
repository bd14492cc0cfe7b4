"""Baseline schema — users and follows.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-18

Databases created by ``followctl init`` are stamped at this revision
without running it; empty databases get it applied by ``followctl upgrade``.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("followers_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("following_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.CheckConstraint("followers_count >= 0", name="ck_users_followers_nonneg"),
        sa.CheckConstraint("following_count >= 0", name="ck_users_following_nonneg"),
    )

    op.create_table(
        "follows",
        sa.Column(
            "follower_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "following_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.PrimaryKeyConstraint("follower_id", "following_id", name="follows_pkey"),
        sa.CheckConstraint("follower_id != following_id", name="no_self_follow"),
    )
    op.create_index("idx_follows_follower", "follows", ["follower_id"])
    op.create_index("idx_follows_following", "follows", ["following_id"])


def downgrade() -> None:
    op.drop_index("idx_follows_following", table_name="follows")
    op.drop_index("idx_follows_follower", table_name="follows")
    op.drop_table("follows")
    op.drop_table("users")
