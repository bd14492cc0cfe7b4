"""Classify constraint violations raised by the backing store.

Only the kind of violation matters to callers; the driver's message text
never leaves this module. PostgreSQL drivers expose a SQLSTATE on the
original exception; SQLite only offers the message, so both are checked.
"""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy.exc import IntegrityError


class Violation(StrEnum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    OTHER = "other"


_SQLSTATES: dict[str, Violation] = {
    "23505": Violation.UNIQUE,
    "23503": Violation.FOREIGN_KEY,
    "23514": Violation.CHECK,
}

_MESSAGE_MARKERS: tuple[tuple[str, Violation], ...] = (
    ("unique constraint", Violation.UNIQUE),
    ("duplicate key", Violation.UNIQUE),
    ("foreign key constraint", Violation.FOREIGN_KEY),
    ("check constraint", Violation.CHECK),
)


def classify(exc: IntegrityError) -> Violation:
    """Return which constraint family *exc* violated."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _SQLSTATES:
        return _SQLSTATES[sqlstate]

    message = str(orig).lower()
    for marker, violation in _MESSAGE_MARKERS:
        if marker in message:
            return violation
    return Violation.OTHER
