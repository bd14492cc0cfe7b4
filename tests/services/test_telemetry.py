"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from followctl.services.result import ServiceResult
from followctl.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child")
        child.annotate("rows", 2)
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "child"
        assert d["children"][0]["annotations"] == {"rows": 2}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None


class _Probe:
    @traced
    def run(self) -> ServiceResult:
        with trace_span("inner") as span:
            if span is not None:
                span.annotate("k", "v")
        return ServiceResult(ok=True, op="probe")


class TestTraced:
    def test_disabled_returns_result_untouched(self) -> None:
        result = _Probe().run()
        assert result.meta is None

    def test_enabled_attaches_span_tree(self) -> None:
        enable_telemetry()
        result = _Probe().run()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "_Probe.run"
        assert tree["duration_ms"] >= 0
        assert tree["children"][0]["name"] == "inner"
        assert tree["children"][0]["annotations"] == {"k": "v"}

    def test_span_reset_after_call(self) -> None:
        enable_telemetry()
        _Probe().run()
        assert _current_span.get() is None
