"""Command: create the database schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowCommand

if TYPE_CHECKING:
    from followctl.commands._context import AppContext


@click.command(
    "init",
    cls=FollowCommand,
    examples="""\
  followctl init
  followctl init --seed
  followctl --db /tmp/graph.db init""",
)
@click.option("--seed", is_flag=True, help="Insert the ten demo users (alice … jack).")
@click.pass_obj
def init_cmd(app: AppContext, seed: bool) -> None:
    """Create tables and stamp the migration head."""
    from followctl.services.follow import FollowService
    from followctl.services.result import ServiceResult
    from followctl.services.upgrade import UpgradeService

    stamped = UpgradeService(app.store).stamp_current()
    if not stamped.ok or not seed:
        app.emit(stamped)
        return

    seeded = FollowService(app.store).seed()
    if not seeded.ok:
        app.emit(seeded)
        return
    app.emit(
        ServiceResult(
            ok=True,
            op="init",
            data={**stamped.data, "seeded": seeded.data["added"]},
        )
    )
