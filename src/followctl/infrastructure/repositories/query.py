"""Graph Query Engine — read paths over users and follow edges.

Every method opens its own short-lived connection; nothing is cached
between calls. Paginated lists run two reads (a count, then the window)
that are not snapshot-consistent with each other: under concurrent writes
``total`` may describe a slightly different instant than ``items``.

Limits and offsets are used exactly as given. Clamping them to a sane
window is the service layer's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from followctl.domain.deadline import checkpoint
from followctl.domain.errors import UserNotFound
from followctl.domain.models import CounterDrift, User, UserPage
from followctl.infrastructure.database.schema import follows, users

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Connection
    from sqlalchemy.engine import Engine

    from followctl.domain.deadline import Deadline


class QueryRepository:
    """Encapsulates SQL for read-side graph operations."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: int, *, deadline: Deadline | None = None) -> User:
        """Fetch one user. Raises :class:`UserNotFound` if absent."""
        checkpoint(deadline)
        with self._engine.connect() as conn:
            return self.fetch_user(conn, user_id)

    @staticmethod
    def fetch_user(conn: Connection, user_id: int) -> User:
        """Fetch one user on an existing connection (shared with the mutation engine)."""
        row = conn.execute(select(users).where(users.c.id == user_id)).mappings().first()
        if row is None:
            raise UserNotFound(user_id)
        return User.from_row(row)

    def list_users(
        self,
        limit: int,
        offset: int,
        *,
        deadline: Deadline | None = None,
    ) -> UserPage:
        """Page of users in ascending id order, plus the total user count."""
        checkpoint(deadline)
        with self._engine.connect() as conn:
            total = int(conn.execute(select(func.count()).select_from(users)).scalar_one())
            checkpoint(deadline)
            rows = (
                conn.execute(select(users).order_by(users.c.id).limit(limit).offset(offset))
                .mappings()
                .all()
            )
        return UserPage(
            items=[User.from_row(r) for r in rows],
            total=total,
            limit=limit,
            offset=offset,
        )

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def get_followers(
        self,
        user_id: int,
        limit: int,
        offset: int,
        *,
        deadline: Deadline | None = None,
    ) -> UserPage:
        """Users following *user_id*, most recent follower first."""
        return self._edge_page(
            match=follows.c.following_id == user_id,
            join_on=follows.c.follower_id,
            limit=limit,
            offset=offset,
            deadline=deadline,
        )

    def get_following(
        self,
        user_id: int,
        limit: int,
        offset: int,
        *,
        deadline: Deadline | None = None,
    ) -> UserPage:
        """Users *user_id* follows, most recently followed first."""
        return self._edge_page(
            match=follows.c.follower_id == user_id,
            join_on=follows.c.following_id,
            limit=limit,
            offset=offset,
            deadline=deadline,
        )

    def _edge_page(
        self,
        *,
        match: ColumnElement[bool],
        join_on: ColumnElement[int],
        limit: int,
        offset: int,
        deadline: Deadline | None,
    ) -> UserPage:
        # total comes from the edge set, not the denormalized counter
        count_stmt = select(func.count()).select_from(follows).where(match)
        page_stmt = (
            select(users)
            .join(follows, users.c.id == join_on)
            .where(match)
            .order_by(follows.c.created_at.desc(), join_on.desc())
            .limit(limit)
            .offset(offset)
        )

        checkpoint(deadline)
        with self._engine.connect() as conn:
            total = int(conn.execute(count_stmt).scalar_one())
            checkpoint(deadline)
            rows = conn.execute(page_stmt).mappings().all()

        return UserPage(
            items=[User.from_row(r) for r in rows],
            total=total,
            limit=limit,
            offset=offset,
        )

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------

    def count_edges(self) -> int:
        with self._engine.connect() as conn:
            return int(conn.execute(select(func.count()).select_from(follows)).scalar_one())

    def counter_drift(self) -> list[CounterDrift]:
        """Users whose stored counters differ from their true edge counts.

        Runs as a single statement, so the comparison is consistent with
        itself even while mutations are in flight.
        """
        inbound = (
            select(follows.c.following_id.label("user_id"), func.count().label("n"))
            .group_by(follows.c.following_id)
            .subquery()
        )
        outbound = (
            select(follows.c.follower_id.label("user_id"), func.count().label("n"))
            .group_by(follows.c.follower_id)
            .subquery()
        )
        actual_followers = func.coalesce(inbound.c.n, 0)
        actual_following = func.coalesce(outbound.c.n, 0)

        stmt = (
            select(
                users.c.id,
                users.c.username,
                users.c.followers_count,
                users.c.following_count,
                actual_followers.label("actual_followers"),
                actual_following.label("actual_following"),
            )
            .outerjoin(inbound, inbound.c.user_id == users.c.id)
            .outerjoin(outbound, outbound.c.user_id == users.c.id)
            .where(
                (users.c.followers_count != actual_followers)
                | (users.c.following_count != actual_following)
            )
            .order_by(users.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()

        return [
            CounterDrift(
                user_id=r["id"],
                username=r["username"],
                followers_count=r["followers_count"],
                actual_followers=r["actual_followers"],
                following_count=r["following_count"],
                actual_following=r["actual_following"],
            )
            for r in rows
        ]
