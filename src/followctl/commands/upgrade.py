"""Command: bring the database schema to the latest revision."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowCommand

if TYPE_CHECKING:
    from followctl.commands._context import AppContext


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl upgrade
  followctl --json upgrade --check
  followctl upgrade --stamp""",
)
@click.option("--check", "check_only", is_flag=True, help="List pending revisions and stop.")
@click.option("--stamp", is_flag=True, help="Mark the schema current without migrating.")
@click.pass_obj
def upgrade(app: AppContext, check_only: bool, stamp: bool) -> None:
    """Apply pending schema revisions, then verify the counters."""
    if check_only and stamp:
        raise click.UsageError("--check and --stamp cannot be combined")

    from followctl.services.upgrade import UpgradeService

    service = UpgradeService(app.store)
    if check_only:
        app.emit(service.check_pending())
    elif stamp:
        app.emit(service.stamp_current())
    else:
        app.emit(service.apply())
