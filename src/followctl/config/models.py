"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, followctl.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` wins over ``path`` when both are set. ``path`` is resolved
    relative to the directory holding followctl.toml (or the CWD).
    """

    model_config = {"frozen": True}

    url: str | None = None
    path: str = ".followctl/followctl.db"
    busy_timeout: float = 5.0
    pool_size: int = 5
    echo: bool = False


class PaginationConfig(BaseModel):
    """[pagination] section — clamping window applied by the service layer."""

    model_config = {"frozen": True}

    default_limit: int = Field(default=20, gt=0)
    max_limit: int = Field(default=100, gt=0)

    @model_validator(mode="after")
    def _default_within_max(self) -> PaginationConfig:
        if self.default_limit > self.max_limit:
            msg = f"default_limit ({self.default_limit}) exceeds max_limit ({self.max_limit})"
            raise ValueError(msg)
        return self


class FollowConfig(BaseModel):
    """Root configuration composing all followctl.toml sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
