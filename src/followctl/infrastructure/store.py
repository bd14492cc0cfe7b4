"""Store — the single dependency injected into every service.

Owns the SQLAlchemy engine (and with it the connection pool) and hands
out the query, mutation, and provisioning repositories built on it. The
Store holds no graph state of its own: every repository call re-reads
the database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from followctl.infrastructure.database.engine import init_database
from followctl.infrastructure.repositories import (
    MutationRepository,
    ProvisioningRepository,
    QueryRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from followctl.config.settings import FollowSettings

logger = logging.getLogger(__name__)


class Store:
    """Repository access over one engine.

    Constructed once per process from :class:`FollowSettings` and shared by
    every worker thread; the repositories are stateless apart from the
    engine reference, so no locking is needed.
    """

    def __init__(self, settings: FollowSettings) -> None:
        self._settings = settings
        db = settings.database
        self._engine: Engine = init_database(
            settings.db_url,
            busy_timeout=db.busy_timeout,
            pool_size=db.pool_size,
            echo=db.echo,
        )
        self._queries = QueryRepository(self._engine)
        self._mutations = MutationRepository(self._engine)
        self._provisioning = ProvisioningRepository(self._engine)
        logger.debug("store opened: %s", self._engine.url.render_as_string(hide_password=True))

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> FollowSettings:
        return self._settings

    @property
    def queries(self) -> QueryRepository:
        return self._queries

    @property
    def mutations(self) -> MutationRepository:
        return self._mutations

    @property
    def provisioning(self) -> ProvisioningRepository:
        return self._provisioning

    def close(self) -> None:
        """Dispose the connection pool."""
        self._engine.dispose()
