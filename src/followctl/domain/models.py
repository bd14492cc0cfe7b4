"""Entity shapes for the follow graph.

Pure data: no behavior beyond construction from a database row.
Counters on :class:`User` are derived from the ``follows`` edge set and
are only ever changed by the mutation engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

# ids are 32-bit INTEGER columns
MAX_USER_ID = 2**31 - 1


class User(BaseModel):
    """A user record with denormalized follower/following counters."""

    model_config = {"frozen": True}

    id: int = Field(gt=0, le=MAX_USER_ID)
    username: str
    email: str
    followers_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> User:
        return cls(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            followers_count=row["followers_count"],
            following_count=row["following_count"],
            created_at=row["created_at"],
        )


class Follow(BaseModel):
    """A directed edge: *follower_id* follows *following_id*."""

    model_config = {"frozen": True}

    follower_id: int = Field(gt=0, le=MAX_USER_ID)
    following_id: int = Field(gt=0, le=MAX_USER_ID)
    created_at: str


class UserPage(BaseModel):
    """One window of users plus the total size of the underlying set.

    ``total`` and ``items`` come from two separate reads and may reflect
    slightly different instants under concurrent writes.
    """

    model_config = {"frozen": True}

    items: list[User] = Field(default_factory=list)
    total: int = 0
    limit: int
    offset: int


class CounterDrift(BaseModel):
    """A user whose stored counters disagree with the edge set."""

    model_config = {"frozen": True}

    user_id: int
    username: str
    followers_count: int
    actual_followers: int
    following_count: int
    actual_following: int
