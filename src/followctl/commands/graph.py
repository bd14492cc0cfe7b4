"""Commands: follow, unfollow, followers, following."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowCommand, pagination_options, timeout_option
from followctl.domain.deadline import Deadline
from followctl.services.follow import FollowService

if TYPE_CHECKING:
    from followctl.commands._context import AppContext


def _deadline(timeout: float | None) -> Deadline | None:
    return Deadline(timeout=timeout) if timeout is not None else None


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl follow 1 2
  followctl follow 1 2 --timeout 0.5
  followctl --json follow 3 1""",
)
@click.argument("follower_id", type=int)
@click.argument("following_id", type=int)
@timeout_option
@click.pass_obj
def follow(app: AppContext, follower_id: int, following_id: int, timeout: float | None) -> None:
    """Make FOLLOWER_ID follow FOLLOWING_ID."""
    svc = FollowService(app.store)
    app.emit(svc.follow(follower_id, following_id, deadline=_deadline(timeout)))


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl unfollow 1 2
  followctl --json unfollow 1 2""",
)
@click.argument("follower_id", type=int)
@click.argument("following_id", type=int)
@timeout_option
@click.pass_obj
def unfollow(app: AppContext, follower_id: int, following_id: int, timeout: float | None) -> None:
    """Make FOLLOWER_ID stop following FOLLOWING_ID."""
    svc = FollowService(app.store)
    app.emit(svc.unfollow(follower_id, following_id, deadline=_deadline(timeout)))


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl followers 2
  followctl followers 2 --limit 2
  followctl --json followers 2 --offset 20""",
)
@click.argument("user_id", type=int)
@pagination_options
@click.pass_obj
def followers(app: AppContext, user_id: int, limit: int | None, offset: int) -> None:
    """List who follows USER_ID, most recent first."""
    app.emit(FollowService(app.store).get_followers(user_id, limit, offset))


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl following 1
  followctl --json following 1 --limit 50""",
)
@click.argument("user_id", type=int)
@pagination_options
@click.pass_obj
def following(app: AppContext, user_id: int, limit: int | None, offset: int) -> None:
    """List who USER_ID follows, most recent first."""
    app.emit(FollowService(app.store).get_following(user_id, limit, offset))
