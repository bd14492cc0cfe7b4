"""AppContext — the object every command receives via ``@click.pass_obj``.

Built once by the root group. It applies logging and telemetry settings,
opens the Store on first use, and turns a ServiceResult into output plus
an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followctl.config.logging import configure_logging
from followctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from followctl.config.settings import FollowSettings
    from followctl.infrastructure.store import Store
    from followctl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by the command tree.

    ``--help`` and ``--version`` never reach :attr:`store`, so they work
    without a database.
    """

    def __init__(self, settings: FollowSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._store: Store | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from followctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> Store:
        if self._store is None:
            from followctl.infrastructure.store import Store

            self._store = Store(self.settings)
        return self._store

    def close(self) -> None:
        """Dispose the Store's connection pool if one was opened."""
        store, self._store = self._store, None
        if store is not None:
            store.close()

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Success goes to stdout (warnings, outside JSON mode, to stderr) and
        returns. Failure goes to stderr and exits 1.
        """
        rendered = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)

        click.echo(rendered)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
