"""FollowService — request boundary over the graph query and mutation engines.

Responsibilities, in order, for every call:

1. Reject structurally invalid input (ids outside ``1..MAX_USER_ID``) as
   ``INVALID_INPUT`` without touching the store.
2. Clamp pagination to ``[pagination]`` settings: a limit that is not
   positive or exceeds ``max_limit`` becomes ``default_limit``; a negative
   offset becomes 0.
3. Delegate to the engine.
4. Translate the outcome into a :class:`ServiceResult`.

Error codes:

=====================  ==============================================
``NOT_FOUND``          user id unknown
``SELF_FOLLOW``        follower == following
``ALREADY_FOLLOWING``  duplicate edge
``NOT_FOLLOWING``      unfollow of an absent edge
``INVALID_INPUT``      id not in ``1..MAX_USER_ID``
``CANCELLED``          caller cancelled; transaction rolled back
``DEADLINE_EXCEEDED``  caller timeout elapsed; transaction rolled back
``INTERNAL``           anything else; logged, message is opaque
=====================  ==============================================
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from followctl.domain.errors import GraphError, OperationInterrupted
from followctl.domain.models import MAX_USER_ID
from followctl.services.base import BaseService
from followctl.services.result import ServiceError, ServiceResult
from followctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from followctl.domain.deadline import Deadline
    from followctl.domain.models import UserPage

logger = structlog.get_logger(__name__)


class FollowService(BaseService):
    """Caller-facing operations on the follow graph."""

    # ------------------------------------------------------------------
    # Boundary helpers
    # ------------------------------------------------------------------

    def clamp_page(self, limit: int | None, offset: int | None) -> tuple[int, int]:
        """Apply the configured pagination window."""
        window = self._store.settings.pagination
        if limit is None or limit <= 0 or limit > window.max_limit:
            limit = window.default_limit
        if offset is None or offset < 0:
            offset = 0
        return limit, offset

    def _invalid_ids(self, op: str, **ids: int) -> ServiceResult | None:
        bad = {name: value for name, value in ids.items() if not 0 < value <= MAX_USER_ID}
        if not bad:
            return None
        names = ", ".join(sorted(bad))
        message = f"Invalid user id: {names} must be between 1 and {MAX_USER_ID}"
        return self._failure(op, "INVALID_INPUT", message, **bad)

    def _run(self, op: str, call: Callable[[], ServiceResult], **context: Any) -> ServiceResult:
        """Run *call*, mapping engine outcomes onto error codes one-to-one."""
        try:
            return call()
        except GraphError as exc:
            return self._failure(op, exc.code, str(exc))
        except OperationInterrupted as exc:
            logger.info("service.interrupted", op=op, code=exc.code, **context)
            return self._failure(op, exc.code, str(exc))
        except Exception as exc:
            return self._internal(op, exc, **context)

    @staticmethod
    def _page_data(page: UserPage, key: str) -> dict[str, Any]:
        return {
            key: [u.model_dump() for u in page.items],
            "count": len(page.items),
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced
    def get_user(self, user_id: int, *, deadline: Deadline | None = None) -> ServiceResult:
        op = "get_user"
        if invalid := self._invalid_ids(op, user_id=user_id):
            return invalid

        def call() -> ServiceResult:
            user = self._store.queries.get_user(user_id, deadline=deadline)
            return ServiceResult(ok=True, op=op, data={"user": user.model_dump()})

        return self._run(op, call, user_id=user_id)

    @traced
    def list_users(
        self,
        limit: int | None = None,
        offset: int | None = None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Page through all users in ascending id order."""
        op = "list_users"
        limit, offset = self.clamp_page(limit, offset)

        def call() -> ServiceResult:
            page = self._store.queries.list_users(limit, offset, deadline=deadline)
            return ServiceResult(ok=True, op=op, data=self._page_data(page, "users"))

        return self._run(op, call, limit=limit, offset=offset)

    @traced
    def get_followers(
        self,
        user_id: int,
        limit: int | None = None,
        offset: int | None = None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Users following *user_id*, newest follower first.

        An unknown *user_id* yields an empty page, matching the edge set.
        """
        op = "get_followers"
        if invalid := self._invalid_ids(op, user_id=user_id):
            return invalid
        limit, offset = self.clamp_page(limit, offset)

        def call() -> ServiceResult:
            page = self._store.queries.get_followers(user_id, limit, offset, deadline=deadline)
            data = {"user_id": user_id, **self._page_data(page, "followers")}
            return ServiceResult(ok=True, op=op, data=data)

        return self._run(op, call, user_id=user_id, limit=limit, offset=offset)

    @traced
    def get_following(
        self,
        user_id: int,
        limit: int | None = None,
        offset: int | None = None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Users *user_id* follows, most recently followed first."""
        op = "get_following"
        if invalid := self._invalid_ids(op, user_id=user_id):
            return invalid
        limit, offset = self.clamp_page(limit, offset)

        def call() -> ServiceResult:
            page = self._store.queries.get_following(user_id, limit, offset, deadline=deadline)
            data = {"user_id": user_id, **self._page_data(page, "following")}
            return ServiceResult(ok=True, op=op, data=data)

        return self._run(op, call, user_id=user_id, limit=limit, offset=offset)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def follow(
        self,
        follower_id: int,
        following_id: int,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        op = "follow"
        if invalid := self._invalid_ids(op, follower_id=follower_id, following_id=following_id):
            return invalid

        def call() -> ServiceResult:
            with trace_span("follow_txn"):
                edge = self._store.mutations.follow(follower_id, following_id, deadline=deadline)
            logger.info("user.followed", follower_id=follower_id, following_id=following_id)
            return ServiceResult(
                ok=True,
                op=op,
                data={**edge.model_dump(), "message": "Successfully followed user"},
            )

        return self._run(op, call, follower_id=follower_id, following_id=following_id)

    @traced
    def unfollow(
        self,
        follower_id: int,
        following_id: int,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        op = "unfollow"
        if invalid := self._invalid_ids(op, follower_id=follower_id, following_id=following_id):
            return invalid

        def call() -> ServiceResult:
            with trace_span("unfollow_txn"):
                self._store.mutations.unfollow(follower_id, following_id, deadline=deadline)
            logger.info("user.unfollowed", follower_id=follower_id, following_id=following_id)
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "follower_id": follower_id,
                    "following_id": following_id,
                    "message": "Successfully unfollowed user",
                },
            )

        return self._run(op, call, follower_id=follower_id, following_id=following_id)

    # ------------------------------------------------------------------
    # Provisioning and maintenance
    # ------------------------------------------------------------------

    def create_user(self, username: str, email: str) -> ServiceResult:
        """Provision a new user with zeroed counters."""
        op = "create_user"
        username = username.strip()
        email = email.strip()
        if not username or len(username) > 50:
            return self._failure(op, "INVALID_INPUT", "Username must be 1-50 characters")
        if "@" not in email or len(email) > 255:
            return self._failure(op, "INVALID_INPUT", f"Invalid email address: {email!r}")

        def call() -> ServiceResult:
            user = self._store.provisioning.create_user(username, email)
            logger.info("user.created", user_id=user.id, username=user.username)
            return ServiceResult(ok=True, op=op, data={"user": user.model_dump()})

        return self._run(op, call, username=username)

    def seed(self) -> ServiceResult:
        """Insert the demo users that are not present yet."""
        op = "seed"

        def call() -> ServiceResult:
            added = self._store.provisioning.seed_users()
            return ServiceResult(ok=True, op=op, data={"added": added, "count": len(added)})

        return self._run(op, call)

    @traced
    def check_consistency(self) -> ServiceResult:
        """Compare every user's stored counters with the edge set."""
        op = "check"

        def call() -> ServiceResult:
            drift = self._store.queries.counter_drift()
            data = {
                "consistent": not drift,
                "edges": self._store.queries.count_edges(),
                "drift": [d.model_dump() for d in drift],
            }
            if drift:
                logger.warning("counters.drift", users=[d.user_id for d in drift])
                return ServiceResult(
                    ok=False,
                    op=op,
                    data=data,
                    error=ServiceError(
                        code="COUNTER_DRIFT",
                        message=f"{len(drift)} user(s) have counters out of sync with edges",
                    ),
                )
            return ServiceResult(ok=True, op=op, data=data)

        return self._run(op, call)
