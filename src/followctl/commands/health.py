"""Command: liveness / readiness probe."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.commands._base import FollowCommand

if TYPE_CHECKING:
    from followctl.commands._context import AppContext


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl health
  followctl health --live
  followctl --json health --ready""",
)
@click.option(
    "--ready", "mode", flag_value="ready", default=True, help="Database readiness (default)."
)
@click.option("--live", "mode", flag_value="live", help="Process liveness only.")
@click.pass_obj
def health(app: AppContext, mode: str) -> None:
    """Exit 0 when healthy, 1 otherwise."""
    from followctl.services.health import HealthService

    if mode == "live":
        # no store access: liveness must not depend on the database
        app.emit(HealthService.liveness())
        return
    app.emit(HealthService(app.store).readiness())
