"""Database engine, schema, and migrations via SQLAlchemy Core + Alembic."""

from followctl.infrastructure.database.engine import create_db_engine, init_database
from followctl.infrastructure.database.schema import follows, metadata, users

__all__ = [
    "create_db_engine",
    "follows",
    "init_database",
    "metadata",
    "users",
]
