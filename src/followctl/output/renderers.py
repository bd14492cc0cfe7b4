"""Rich rendering of ServiceResult, one function per op.

:func:`render_result` looks the op up in ``_OP_RENDERERS``; ops without an
entry print their data as ``key: value`` lines.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from followctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from followctl.services.result import ServiceResult

_Renderer = Callable[["ServiceResult", "Console", bool], None]

# where each paginated op keeps its user list in result.data
_PAGE_KEYS: dict[str, str] = {
    "list_users": "users",
    "get_followers": "followers",
    "get_following": "following",
}

_USER_COLUMNS: tuple[tuple[str, str, dict[str, Any]], ...] = (
    ("id", "ID", {"style": "fc.id", "justify": "right", "no_wrap": True}),
    ("username", "Username", {"style": "fc.username"}),
    ("email", "Email", {}),
    ("followers_count", "Followers", {"style": "fc.count", "justify": "right"}),
    ("following_count", "Following", {"style": "fc.count", "justify": "right"}),
)


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose)
    if verbose and result.meta:
        _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line of status, or one user id per line for paginated ops."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    page_key = _PAGE_KEYS.get(result.op)
    if page_key is None:
        return f"OK: {result.op}"
    return "\n".join(str(item["id"]) for item in result.data.get(page_key, []))


def _value_style(key: str) -> str:
    if key == "id" or key.endswith("_id"):
        return "fc.id"
    if key == "username":
        return "fc.username"
    if key.endswith("_count"):
        return "fc.count"
    return ""


def _field(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    if isinstance(value, (dict, list)):
        shown = json.dumps(value, separators=(",", ":"))
    else:
        shown = str(value)
    console.print(
        Text(f"{' ' * indent}{key}:", style="fc.key"), Text(shown, style=_value_style(key))
    )


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry":
            _render_span(console, value, depth=1)
        else:
            _field(console, key, value, indent=4)


def _span_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    return "yellow" if duration_ms > 100 else "dim"


def _render_span(console: Console, span: dict[str, Any], depth: int) -> None:
    duration = span.get("duration_ms", 0.0)
    line = Text(" " * (4 * depth))
    line.append(f"{duration:>8.2f}ms", style=_span_style(duration))
    line.append(f"  {span.get('name', '?')}")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, depth + 1)


def _user_table(users: list[dict[str, Any]], *, verbose: bool) -> Table:
    columns = list(_USER_COLUMNS)
    if verbose:
        columns.append(("created_at", "Created", {"style": "dim"}))

    table = Table(show_header=True, pad_edge=False)
    for _key, title, options in columns:
        table.add_column(title, **options)
    for user in users:
        table.add_row(*(str(user.get(key, "")) for key, _title, _options in columns))
    return table


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    line = Text("ERROR", style="fc.error")
    line.append(f"  {result.op}", style="fc.op")
    if error is not None:
        line.append(f" [{error.code}]", style="fc.op")
    line.append(" — ")
    line.append(error.message if error is not None else "Unknown error")
    console.print(line)

    if verbose and error is not None and error.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in error.detail.items():
            _field(console, key, value, indent=4)


def _ok_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="fc.ok"), Text(f"  {result.op}", style="fc.op"))


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_user(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    for key, value in result.data.get("user", {}).items():
        if verbose or key != "created_at":
            _field(console, key, value)


def _render_page(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    users = data.get(_PAGE_KEYS[result.op], [])
    if "user_id" in data:
        _field(console, "user_id", data["user_id"])
    console.print(_user_table(users, verbose=verbose))

    offset = data.get("offset", 0)
    window = f"{offset + 1}-{offset + len(users)}" if users else "0"
    console.print()
    console.print(f"{window} of {data.get('total', len(users))}")


def _render_check(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    _field(console, "edges", result.data.get("edges", 0))
    _field(console, "consistent", result.data.get("consistent", True))


_OP_RENDERERS: dict[str, _Renderer] = {
    "get_user": _render_user,
    "create_user": _render_user,
    "list_users": _render_page,
    "get_followers": _render_page,
    "get_following": _render_page,
    "check": _render_check,
}
