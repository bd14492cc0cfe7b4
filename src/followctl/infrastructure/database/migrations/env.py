"""Alembic runtime environment for followctl revisions."""

from __future__ import annotations

from typing import Any

from alembic import context
from sqlalchemy import create_engine, event, make_url, pool
from sqlalchemy.engine import Engine

from followctl.infrastructure.database.schema import metadata


def _database_url() -> str:
    url = context.config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("sqlalchemy.url is not set on the Alembic config")
    return url


def _enable_foreign_keys(dbapi_conn: Any, _: Any) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _migration_engine(url: str) -> Engine:
    """Single-use engine; SQLite connections get foreign keys enforced."""
    engine = create_engine(url, poolclass=pool.NullPool)
    if make_url(url).get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def run_migrations_offline() -> None:
    """Emit the migration SQL instead of executing it."""
    context.configure(
        url=_database_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with _migration_engine(_database_url()).connect() as connection:
        # SQLite cannot ALTER constraints in place; batch mode rebuilds tables.
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
