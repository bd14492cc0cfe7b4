"""Shared pytest fixtures and test helpers for followctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from followctl.config.settings import FollowSettings
from followctl.domain.models import User
from followctl.infrastructure.database.engine import init_database
from followctl.infrastructure.database.schema import follows, users
from followctl.infrastructure.store import Store
from followctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'followctl.db'}"


@pytest.fixture
def db_engine(db_url: str) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(db_url)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FollowSettings:
    """Settings rooted at a temp dir, isolated from any real config."""
    monkeypatch.delenv("FOLLOWCTL_CONFIG", raising=False)
    return FollowSettings.from_cli(root=tmp_path)


@pytest.fixture
def store(settings: FollowSettings) -> Generator[Store]:
    """Store over a fresh SQLite file."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def people(store: Store) -> dict[str, User]:
    """Four provisioned users keyed by username."""
    return {
        name: store.provisioning.create_user(name, f"{name}@example.com")
        for name in ("alice", "bob", "carol", "dave")
    }


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """`-v` enables telemetry in the calling context; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("FOLLOWCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def edge_count(engine: Engine) -> int:
    with engine.connect() as conn:
        return int(conn.execute(select(func.count()).select_from(follows)).scalar_one())


def has_edge(engine: Engine, follower_id: int, following_id: int) -> bool:
    stmt = select(follows.c.follower_id).where(
        follows.c.follower_id == follower_id, follows.c.following_id == following_id
    )
    with engine.connect() as conn:
        return conn.execute(stmt).first() is not None


def counters(engine: Engine, user_id: int) -> tuple[int, int]:
    """``(followers_count, following_count)`` as stored."""
    with engine.connect() as conn:
        row = conn.execute(
            select(users.c.followers_count, users.c.following_count).where(users.c.id == user_id)
        ).one()
    return row.followers_count, row.following_count


def assert_counters_match_edges(engine: Engine) -> None:
    """Every user's stored counters equal their true edge counts."""
    with engine.connect() as conn:
        rows = conn.execute(select(users.c.id)).scalars().all()
        for user_id in rows:
            inbound = conn.execute(
                select(func.count()).select_from(follows).where(follows.c.following_id == user_id)
            ).scalar_one()
            outbound = conn.execute(
                select(func.count()).select_from(follows).where(follows.c.follower_id == user_id)
            ).scalar_one()
            stored = conn.execute(
                select(users.c.followers_count, users.c.following_count).where(
                    users.c.id == user_id
                )
            ).one()
            assert stored.followers_count == inbound, f"user {user_id} followers drifted"
            assert stored.following_count == outbound, f"user {user_id} following drifted"
