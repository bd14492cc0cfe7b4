"""followctl subcommands.

Command modules are imported inside :func:`register_commands` rather than
at package import time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from followctl.commands.check import check
    from followctl.commands.graph import follow, followers, following, unfollow
    from followctl.commands.health import health
    from followctl.commands.init_cmd import init_cmd
    from followctl.commands.upgrade import upgrade
    from followctl.commands.user import user

    for command in (
        user,
        follow,
        unfollow,
        followers,
        following,
        init_cmd,
        upgrade,
        health,
        check,
    ):
        cli.add_command(command)
