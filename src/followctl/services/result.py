"""What a service call hands back.

Every public method on the service classes returns a :class:`ServiceResult`.
Storage exceptions stop at the service layer; the CLI only ever sees this
model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceError(BaseModel):
    """Why a call failed.

    ``code`` is a stable, machine-readable string (``SELF_FOLLOW``,
    ``ALREADY_FOLLOWING``, ...). ``message`` may be shown to users and never
    carries database text; ``detail`` holds ids and other context.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    ``data`` is the payload when ``ok`` is true and ``error`` is set when it
    is false. ``warnings`` never change ``ok``. ``meta`` carries extras such
    as the ``--verbose`` timing tree.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
