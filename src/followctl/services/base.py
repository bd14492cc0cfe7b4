"""BaseService — foundation for followctl services.

Every service receives a :class:`Store` at construction time. Services
never open transactions themselves; the mutation engine owns every write
transaction so an edge and its counters always commit together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from followctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from followctl.infrastructure.store import Store

logger = structlog.get_logger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class FollowService(BaseService):
            def follow(self, follower_id: int, following_id: int) -> ServiceResult:
                edge = self._store.mutations.follow(follower_id, following_id)
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, code: str, message: str, **detail: object) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=dict(detail)),
        )

    @staticmethod
    def _internal(op: str, exc: BaseException, **context: object) -> ServiceResult:
        """Log an unexpected failure with full context; return an opaque error."""
        logger.error("service.internal_error", op=op, exc_info=exc, **context)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="INTERNAL", message="Internal error"),
        )
