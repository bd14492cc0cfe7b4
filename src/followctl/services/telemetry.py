"""Request timing for ``--verbose``.

A service method decorated with :func:`traced` opens a root :class:`Span`;
:func:`trace_span` blocks inside it add children (the follow and unfollow
transactions, for instance). The finished tree is attached to the
result as ``meta["telemetry"]`` and rendered under the command output.

With telemetry off, both entry points cost one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from followctl.services.result import ServiceResult

logger = structlog.get_logger("followctl.telemetry")

_enabled: ContextVar[bool] = ContextVar("followctl_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("followctl_span", default=None)


@dataclass
class Span:
    """One timed region; children are the regions opened inside it."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, or 0.0 while the span is still open."""
        return 0.0 if self.finished is None else (self.finished - self.started) * 1000.0

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        """Attach a free-form value shown next to the span in verbose output."""
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Nested dict for JSON output; empty annotations/children are omitted."""
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    """Make *span* current for the duration of the block, then close it."""
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the active span.

    Yields None (and records nothing) when telemetry is off or no
    :func:`traced` call is in progress.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    with _activate(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach the span tree to its ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        with _activate(Span(name=func.__qualname__)) as span:
            result = func(*args, **kwargs)

        logger.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            children=len(span.children),
        )
        if not isinstance(result, ServiceResult):
            return result
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
