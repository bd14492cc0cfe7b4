"""Tests for constraint-violation classification."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from followctl.infrastructure.database.integrity import Violation, classify
from followctl.infrastructure.database.schema import follows, users


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__("constraint violated")
        self.sqlstate = sqlstate


def _wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


class TestClassifyFromSqlstate:
    @pytest.mark.parametrize(
        ("sqlstate", "expected"),
        [
            ("23505", Violation.UNIQUE),
            ("23503", Violation.FOREIGN_KEY),
            ("23514", Violation.CHECK),
            ("23502", Violation.OTHER),
        ],
    )
    def test_sqlstate(self, sqlstate: str, expected: Violation) -> None:
        assert classify(_wrap(_PgError(sqlstate))) is expected


class TestClassifyFromSqlite:
    def test_unique(self, db_engine: Engine) -> None:
        row = {"username": "a", "email": "a@x", "created_at": "now"}
        with db_engine.begin() as conn:
            conn.execute(insert(users).values(**row))
        with pytest.raises(IntegrityError) as excinfo, db_engine.begin() as conn:
            conn.execute(insert(users).values(**row))
        assert classify(excinfo.value) is Violation.UNIQUE

    def test_foreign_key(self, db_engine: Engine) -> None:
        with pytest.raises(IntegrityError) as excinfo, db_engine.begin() as conn:
            conn.execute(insert(follows).values(follower_id=1, following_id=2, created_at="now"))
        assert classify(excinfo.value) is Violation.FOREIGN_KEY

    def test_check(self) -> None:
        orig = sqlite3.IntegrityError("CHECK constraint failed: no_self_follow")
        assert classify(_wrap(orig)) is Violation.CHECK

    def test_not_null_is_other(self) -> None:
        orig = sqlite3.IntegrityError("NOT NULL constraint failed: users.email")
        assert classify(_wrap(orig)) is Violation.OTHER
