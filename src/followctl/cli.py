"""Entry point: the ``followctl`` group, its global options, and subcommands."""

from __future__ import annotations

import click

from followctl import __version__
from followctl.commands import register_commands
from followctl.commands._context import AppContext
from followctl.config.settings import FollowSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="followctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print ids or a one-line status only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and timing spans.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c", "--config", "config_path", default=None, help="Use this followctl.toml."
)
@click.option("--db", "db_path", default=None, help="SQLite database file to use.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_path: str | None,
) -> None:
    """followctl — follow graph with consistent follower counters."""
    app = AppContext(
        FollowSettings.from_cli(
            config_path=config_path,
            db_path=db_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
