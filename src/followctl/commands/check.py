"""Command: verify counters against the edge set."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowCommand

if TYPE_CHECKING:
    from followctl.commands._context import AppContext


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl check
  followctl --json check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Report users whose follower/following counts disagree with the edges."""
    from followctl.services.follow import FollowService

    app.emit(FollowService(app.store).check_consistency())
