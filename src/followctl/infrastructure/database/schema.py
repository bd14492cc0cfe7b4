"""SQLAlchemy Core table definitions for the follow graph.

``users.followers_count`` / ``users.following_count`` are denormalized
aggregates of ``follows``; only the mutation engine writes them, always
in the same transaction as the edge change.

The composite primary key and the self-follow CHECK on ``follows`` back
the application-level checks in the mutation engine; both layers enforce
the same invariants.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("followers_count", Integer, nullable=False, default=0, server_default="0"),
    Column("following_count", Integer, nullable=False, default=0, server_default="0"),
    Column("created_at", Text, nullable=False),  # ISO 8601 UTC, microseconds
    CheckConstraint("followers_count >= 0", name="ck_users_followers_nonneg"),
    CheckConstraint("following_count >= 0", name="ck_users_following_nonneg"),
)

follows = Table(
    "follows",
    metadata,
    Column(
        "follower_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "following_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", Text, nullable=False),
    PrimaryKeyConstraint("follower_id", "following_id", name="follows_pkey"),
    CheckConstraint("follower_id != following_id", name="no_self_follow"),
)

# ---------------------------------------------------------------------------
# Indexes backing both directional list queries
# ---------------------------------------------------------------------------

Index("idx_follows_follower", follows.c.follower_id)
Index("idx_follows_following", follows.c.following_id)
