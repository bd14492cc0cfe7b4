"""Tests for typed engine outcomes and their stable codes."""

from __future__ import annotations

import pytest

from followctl.domain.errors import (
    AlreadyFollowing,
    DeadlineExceeded,
    DuplicateUser,
    GraphError,
    NotFollowing,
    OperationCancelled,
    OperationInterrupted,
    SelfFollow,
    UserNotFound,
)


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (UserNotFound(7), "NOT_FOUND"),
        (SelfFollow(7), "SELF_FOLLOW"),
        (AlreadyFollowing(1, 2), "ALREADY_FOLLOWING"),
        (NotFollowing(1, 2), "NOT_FOLLOWING"),
        (DuplicateUser("alice", "alice@example.com"), "DUPLICATE_USER"),
    ],
)
def test_graph_error_codes(exc: GraphError, code: str) -> None:
    assert isinstance(exc, GraphError)
    assert exc.code == code
    assert str(exc)


@pytest.mark.parametrize(
    ("exc", "code"),
    [(OperationCancelled(), "CANCELLED"), (DeadlineExceeded(1.5), "DEADLINE_EXCEEDED")],
)
def test_interruptions_are_not_graph_errors(exc: OperationInterrupted, code: str) -> None:
    assert isinstance(exc, OperationInterrupted)
    assert not isinstance(exc, GraphError)
    assert exc.code == code


def test_messages_name_the_users() -> None:
    assert "7" in str(UserNotFound(7))
    assert str(AlreadyFollowing(1, 2)) == "User 1 already follows user 2"
    assert str(NotFollowing(1, 2)) == "User 1 does not follow user 2"
    assert str(DeadlineExceeded(1.5)) == "Deadline of 1.5s exceeded"
