"""Graph Mutation Engine — transactional Follow / Unfollow.

Each mutation changes one edge and the two counters it feeds as a single
``engine.begin()`` block: commit on normal exit, rollback on any
exception. The edge set and the counters therefore never diverge as the
observable result of a failed call.

Concurrency rests entirely on the store:

* Two Follow calls for the same pair race on the ``follows`` primary key.
  The loser's INSERT fails with a uniqueness violation, reported as
  :class:`AlreadyFollowing`.
* Counters move by relative ``UPDATE ... SET n = n + 1`` statements inside
  the edge transaction, so concurrent mutations touching the same user
  through different edges cannot lose updates.

No retries happen here. Conflicts and missing users are terminal outcomes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, update
from sqlalchemy.exc import IntegrityError

from followctl.domain.deadline import checkpoint
from followctl.domain.errors import AlreadyFollowing, NotFollowing, SelfFollow, UserNotFound
from followctl.domain.models import Follow
from followctl.infrastructure.database.integrity import Violation, classify
from followctl.infrastructure.database.schema import follows, users
from followctl.infrastructure.repositories._helpers import now_iso
from followctl.infrastructure.repositories.query import QueryRepository

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from followctl.domain.deadline import Deadline

logger = logging.getLogger(__name__)


class MutationRepository:
    """Owns the write transactions over ``follows`` and the user counters."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def follow(
        self,
        follower_id: int,
        following_id: int,
        *,
        deadline: Deadline | None = None,
    ) -> Follow:
        """Create the edge *follower_id* → *following_id*.

        Existence of both users is checked on a read connection before the
        write transaction opens. A user deleted in between is still caught
        by the foreign keys inside the transaction and reported the same way.

        Raises:
            SelfFollow: ``follower_id == following_id`` (no store access).
            UserNotFound: either endpoint does not exist.
            AlreadyFollowing: the edge already exists.
            OperationInterrupted: *deadline* tripped; nothing was written.
        """
        if follower_id == following_id:
            raise SelfFollow(follower_id)

        checkpoint(deadline)
        with self._engine.connect() as conn:
            QueryRepository.fetch_user(conn, follower_id)
            QueryRepository.fetch_user(conn, following_id)

        created_at = now_iso()
        try:
            with self._engine.begin() as conn:
                checkpoint(deadline)
                conn.execute(
                    insert(follows).values(
                        follower_id=follower_id,
                        following_id=following_id,
                        created_at=created_at,
                    )
                )
                checkpoint(deadline)
                self._bump(conn, follower_id, following_id, delta=1)
                checkpoint(deadline)
        except IntegrityError as exc:
            violation = classify(exc)
            if violation is Violation.UNIQUE:
                raise AlreadyFollowing(follower_id, following_id) from None
            if violation is Violation.FOREIGN_KEY:
                raise UserNotFound(self._missing_endpoint(follower_id, following_id)) from None
            if violation is Violation.CHECK:
                raise SelfFollow(follower_id) from None
            raise

        logger.debug("follow committed: %s -> %s", follower_id, following_id)
        return Follow(follower_id=follower_id, following_id=following_id, created_at=created_at)

    def unfollow(
        self,
        follower_id: int,
        following_id: int,
        *,
        deadline: Deadline | None = None,
    ) -> None:
        """Remove the edge *follower_id* → *following_id*.

        Raises:
            NotFollowing: no such edge; the transaction rolls back untouched.
            OperationInterrupted: *deadline* tripped; nothing was written.
        """
        with self._engine.begin() as conn:
            checkpoint(deadline)
            result = conn.execute(
                delete(follows).where(
                    and_(
                        follows.c.follower_id == follower_id,
                        follows.c.following_id == following_id,
                    )
                )
            )
            if result.rowcount == 0:
                raise NotFollowing(follower_id, following_id)

            checkpoint(deadline)
            self._bump(conn, follower_id, following_id, delta=-1)
            checkpoint(deadline)

        logger.debug("unfollow committed: %s -> %s", follower_id, following_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _bump(conn: Connection, follower_id: int, following_id: int, *, delta: int) -> None:
        """Apply *delta* to the follower's following_count and the followee's followers_count."""
        conn.execute(
            update(users)
            .where(users.c.id == follower_id)
            .values(following_count=users.c.following_count + delta)
        )
        conn.execute(
            update(users)
            .where(users.c.id == following_id)
            .values(followers_count=users.c.followers_count + delta)
        )

    def _missing_endpoint(self, follower_id: int, following_id: int) -> int:
        """Which endpoint vanished after the pre-check (follower wins a tie)."""
        with self._engine.connect() as conn:
            try:
                QueryRepository.fetch_user(conn, follower_id)
            except UserNotFound:
                return follower_id
        return following_id
