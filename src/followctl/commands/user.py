"""Command group: read and provision users."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowGroup, pagination_options
from followctl.services.follow import FollowService

if TYPE_CHECKING:
    from followctl.commands._context import AppContext

_USER_EXAMPLES = """\
  followctl user get 1
  followctl user list --limit 10 --offset 20
  followctl user create alice alice@example.com"""


@click.group(cls=FollowGroup, examples=_USER_EXAMPLES)
@click.pass_obj
def user(app: AppContext) -> None:
    """Look up, list, and provision users."""


@user.command(
    examples="""\
  followctl user get 1
  followctl --json user get 1"""
)
@click.argument("user_id", type=int)
@click.pass_obj
def get(app: AppContext, user_id: int) -> None:
    """Show one user with their follower/following counts."""
    app.emit(FollowService(app.store).get_user(user_id))


@user.command(
    name="list",
    examples="""\
  followctl user list
  followctl user list --limit 5 --offset 5
  followctl -q user list""",
)
@pagination_options
@click.pass_obj
def list_cmd(app: AppContext, limit: int | None, offset: int) -> None:
    """List users in ascending id order."""
    app.emit(FollowService(app.store).list_users(limit, offset))


@user.command(
    examples="""\
  followctl user create alice alice@example.com"""
)
@click.argument("username")
@click.argument("email")
@click.pass_obj
def create(app: AppContext, username: str, email: str) -> None:
    """Provision a new user (counters start at zero)."""
    app.emit(FollowService(app.store).create_user(username, email))
