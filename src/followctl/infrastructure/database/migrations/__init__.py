"""Alembic revisions for the followctl schema.

The Alembic config is built in code from a database URL; there is no
``alembic.ini``. Revision scripts live in ``versions/`` next to this file.
"""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config

SCRIPT_LOCATION = Path(__file__).resolve().parent


def build_config(db_url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def stamp_head(db_url: str) -> None:
    """Record the head revision without running any revision scripts.

    For schemas built directly from table metadata, which already match head.
    """
    from alembic import command

    command.stamp(build_config(db_url), "head")
