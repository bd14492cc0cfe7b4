"""UpgradeService — schema migrations with Alembic.

``apply`` runs CHECK → MIGRATE (or STAMP) → VALIDATE → REPORT. A database
whose tables were created straight from metadata (every ``Store`` does
this on open) but never stamped is stamped at head rather than migrated.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import structlog
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect

from followctl.infrastructure.database.migrations import build_config, stamp_head
from followctl.services.base import BaseService
from followctl.services.result import ServiceResult

if TYPE_CHECKING:
    from alembic.script import Script

logger = structlog.get_logger(__name__)


def _walk_down(script: ScriptDirectory, head: str | None, stop: str | None) -> Iterator[Script]:
    """Yield revisions from *head* downwards, stopping before *stop*."""
    rev = script.get_revision(head) if head else None
    while rev is not None and rev.revision != stop:
        yield rev
        rev = script.get_revision(str(rev.down_revision)) if rev.down_revision else None


class UpgradeService(BaseService):
    """Report, apply, or stamp Alembic revisions for the configured database."""

    def _script(self) -> ScriptDirectory:
        return ScriptDirectory.from_config(build_config(self._store.settings.db_url))

    def _current_revision(self) -> str | None:
        with self._store.engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()

    def _unversioned_schema(self, current: str | None) -> bool:
        return current is None and "users" in inspect(self._store.engine).get_table_names()

    def check_pending(self) -> ServiceResult:
        """List revisions between the database's version and head."""
        op = "upgrade"
        try:
            script = self._script()
            head = script.get_current_head()
            current = self._current_revision()
            pending: list[dict[str, Any]] = [
                {"revision": rev.revision, "description": rev.doc or ""}
                for rev in _walk_down(script, head, current)
            ]
        except Exception as exc:
            logger.error("upgrade.check_failed", exc_info=exc)
            return self._failure(op, "CHECK_FAILED", "Failed to check migrations")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pending_count": len(pending),
                "pending": pending,
                "current": current,
                "head": head,
            },
        )

    def apply(self) -> ServiceResult:
        op = "upgrade"
        checked = self.check_pending()
        if not checked.ok:
            return checked

        current, head = checked.data["current"], checked.data["head"]
        if checked.data["pending_count"] == 0:
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied_count": 0,
                    "current": head,
                    "message": "Database is already up to date",
                },
            )

        stamped = self._unversioned_schema(current)
        cfg = build_config(self._store.settings.db_url)
        try:
            if stamped:
                command.stamp(cfg, "head")
            else:
                command.upgrade(cfg, "head")
        except Exception as exc:
            logger.error("upgrade.migration_failed", exc_info=exc, current=current)
            return self._failure(
                op,
                "MIGRATION_FAILED",
                "Migration failed; database left at its previous revision",
                current=current,
            )

        from followctl.services.follow import FollowService

        warnings: list[str] = []
        if not FollowService(self._store).check_consistency().ok:
            warnings.append("Post-migration check found counters out of sync with edges")

        applied = 0 if stamped else checked.data["pending_count"]
        return ServiceResult(
            ok=True,
            op=op,
            data={"applied_count": applied, "stamped": stamped, "current": head},
            warnings=warnings,
        )

    def stamp_current(self) -> ServiceResult:
        """Record head as the database's revision without running migrations."""
        op = "stamp"
        try:
            stamp_head(self._store.settings.db_url)
            head = self._script().get_current_head()
        except Exception as exc:
            logger.error("upgrade.stamp_failed", exc_info=exc)
            return self._failure(op, "STAMP_FAILED", "Failed to stamp database")
        return ServiceResult(ok=True, op=op, data={"stamped": True, "current": head})
