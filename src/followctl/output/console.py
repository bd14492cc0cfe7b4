"""Rich consoles that print into memory.

Renderers build their output on one of these and hand back the text, so
the CLI stays in charge of where it is written. Rich turns color off on
its own when the console is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

_STYLES = {
    "ok": "bold green",
    "error": "bold red",
    "warning": "bold yellow",
    "op": "bold cyan",
    "key": "dim",
    "id": "bold blue",
    "username": "bold",
    "count": "magenta",
}

FOLLOW_THEME = Theme({f"fc.{name}": style for name, style in _STYLES.items()})

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    buffer = StringIO()
    return Console(
        file=buffer,
        theme=FOLLOW_THEME,
        highlight=False,
        no_color=no_color,
        width=width if width is not None else DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Everything printed on *console* so far."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
