"""Typed outcomes raised by the query and mutation engines.

Each error carries a stable ``code`` that the service layer copies into
``ServiceError.code``. Domain errors are expected results, never retried.
Cancellation errors are kept apart from domain errors so callers can tell
"the graph said no" from "the call was cut short".
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for every expected engine outcome."""

    code = "GRAPH_ERROR"


class UserNotFound(GraphError):
    code = "NOT_FOUND"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class SelfFollow(GraphError):
    code = "SELF_FOLLOW"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} cannot follow themselves")
        self.user_id = user_id


class AlreadyFollowing(GraphError):
    code = "ALREADY_FOLLOWING"

    def __init__(self, follower_id: int, following_id: int) -> None:
        super().__init__(f"User {follower_id} already follows user {following_id}")
        self.follower_id = follower_id
        self.following_id = following_id


class NotFollowing(GraphError):
    code = "NOT_FOLLOWING"

    def __init__(self, follower_id: int, following_id: int) -> None:
        super().__init__(f"User {follower_id} does not follow user {following_id}")
        self.follower_id = follower_id
        self.following_id = following_id


class DuplicateUser(GraphError):
    """Provisioning conflict on the unique username or email."""

    code = "DUPLICATE_USER"

    def __init__(self, username: str, email: str) -> None:
        super().__init__(f"Username or email already exists: {username} / {email}")
        self.username = username
        self.email = email


class OperationInterrupted(Exception):
    """Base class for calls stopped by the caller's deadline or cancellation."""

    code = "INTERRUPTED"


class OperationCancelled(OperationInterrupted):
    code = "CANCELLED"

    def __init__(self) -> None:
        super().__init__("Operation cancelled by caller")


class DeadlineExceeded(OperationInterrupted):
    code = "DEADLINE_EXCEEDED"

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Deadline of {timeout:g}s exceeded")
        self.timeout = timeout
