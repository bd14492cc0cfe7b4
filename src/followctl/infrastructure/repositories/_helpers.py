"""Shared repository helpers."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time, ISO 8601 with fixed microsecond precision.

    Fixed width keeps lexical order equal to chronological order, which the
    ``ORDER BY created_at DESC`` list queries rely on.
    """
    return datetime.now(UTC).isoformat(timespec="microseconds")
