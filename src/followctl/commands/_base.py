"""Click classes and option decorators shared by followctl commands.

Commands and groups built from :class:`FollowCommand` / :class:`FollowGroup`
take an ``examples=`` string. It is printed by ``--examples`` instead of
being folded into ``--help``.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds the ``--examples`` flag when an ``examples`` text is given."""

    examples: str | None
    params: list[click.Parameter]

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                is_eager=True,
                expose_value=False,
                callback=self._print_examples,
                help="Show usage examples and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class FollowCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class FollowGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command()`` children are :class:`FollowCommand`."""

    command_class = FollowCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


def pagination_options(func: Any) -> Any:
    """``--limit`` / ``--offset``. The service clamps whatever is passed."""
    limit = click.option(
        "--limit", default=None, type=int, help="Page size (default and cap from config)."
    )
    offset = click.option("--offset", default=0, type=int, show_default=True, help="Rows to skip.")
    return limit(offset(func))


def timeout_option(func: Any) -> Any:
    return click.option(
        "--timeout",
        default=None,
        type=click.FloatRange(min=0, min_open=True),
        help="Give up and roll back after this many seconds.",
    )(func)
