"""HealthService — liveness and readiness probes.

Liveness answers "is the process able to respond at all" and never
touches the store. Readiness pings the database within a short timeout.
"""

from __future__ import annotations

import time

import structlog
from sqlalchemy import text

from followctl.services.base import BaseService
from followctl.services.result import ServiceError, ServiceResult

logger = structlog.get_logger(__name__)

READINESS_TIMEOUT_SECONDS = 2.0


class HealthService(BaseService):
    """Process and store health probes."""

    @staticmethod
    def liveness() -> ServiceResult:
        """Always ok; callable without a store."""
        return ServiceResult(ok=True, op="health_live", data={"status": "OK"})

    def readiness(self) -> ServiceResult:
        op = "health_ready"
        started = time.perf_counter()
        try:
            with self._store.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as exc:
            logger.error("readiness check failed", exc_info=exc)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="UNAVAILABLE", message="Database unavailable"),
            )

        elapsed = time.perf_counter() - started
        warnings: list[str] = []
        if elapsed > READINESS_TIMEOUT_SECONDS:
            warnings.append(f"Database ping took {elapsed:.2f}s")
        return ServiceResult(
            ok=True,
            op=op,
            data={"status": "Ready", "latency_ms": round(elapsed * 1000, 2)},
            warnings=warnings,
        )
