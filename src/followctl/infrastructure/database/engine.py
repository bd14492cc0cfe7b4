"""Database engine setup.

SQLite is the default store: WAL mode for concurrent reads, foreign keys
on, and a busy timeout so concurrent writers queue on the write lock
instead of failing immediately. Any other SQLAlchemy URL (e.g.
PostgreSQL) is passed through with its dialect defaults.

SQLAlchemy Core (not ORM) is used: every operation is a handful of
explicit statements inside a caller-owned ``engine.begin()`` block, and
no identity map or session state should survive between calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, make_url
from sqlalchemy.engine import Engine

from followctl.infrastructure.database.schema import metadata


def _is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def create_db_engine(
    url: str,
    *,
    busy_timeout: float = 5.0,
    pool_size: int = 5,
    echo: bool = False,
) -> Engine:
    """Create an engine for *url* with SQLite pragmas applied on connect."""
    if not _is_sqlite(url):
        return create_engine(url, echo=echo, pool_size=pool_size, pool_pre_ping=True)

    engine = create_engine(
        url,
        echo=echo,
        pool_size=pool_size,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout * 1000)}")
        cursor.close()

    return engine


def init_database(url: str, **engine_kwargs: Any) -> Engine:
    """Create the schema at *url* and return the engine ready for use.

    For SQLite file URLs the parent directory is created first.
    Idempotent — safe to call on an existing database.
    """
    parsed = make_url(url)
    if _is_sqlite(url) and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(url, **engine_kwargs)
    metadata.create_all(engine)
    return engine
