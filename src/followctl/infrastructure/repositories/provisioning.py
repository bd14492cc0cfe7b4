"""User provisioning — the path that creates users outside the graph core.

The graph engines never insert users; they only read them and move their
counters. New users always start with both counters at zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from followctl.domain.errors import DuplicateUser
from followctl.domain.models import User
from followctl.infrastructure.database.integrity import Violation, classify
from followctl.infrastructure.database.schema import users
from followctl.infrastructure.repositories._helpers import now_iso

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SEED_USERNAMES: tuple[str, ...] = (
    "alice",
    "bob",
    "charlie",
    "diana",
    "eve",
    "frank",
    "grace",
    "henry",
    "ivy",
    "jack",
)


class ProvisioningRepository:
    """Inserts user rows."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_user(self, username: str, email: str) -> User:
        """Insert a user. Raises :class:`DuplicateUser` on a username/email clash."""
        created_at = now_iso()
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    insert(users).values(username=username, email=email, created_at=created_at)
                )
                user_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            if classify(exc) is Violation.UNIQUE:
                raise DuplicateUser(username, email) from None
            raise

        return User(id=user_id, username=username, email=email, created_at=created_at)

    def seed_users(self) -> list[str]:
        """Insert the demo users that are missing. Returns the usernames added."""
        added: list[str] = []
        with self._engine.begin() as conn:
            existing = set(conn.execute(select(users.c.username)).scalars())
            for name in SEED_USERNAMES:
                if name in existing:
                    continue
                conn.execute(
                    insert(users).values(
                        username=name,
                        email=f"{name}@example.com",
                        created_at=now_iso(),
                    )
                )
                added.append(name)
        return added
