"""FollowSettings — one frozen object for CLI flags, env vars, and TOML.

Precedence, highest first:

1. keyword arguments (the global CLI flags)
2. ``FOLLOWCTL_*`` environment variables, ``__`` separating nested keys
   (``FOLLOWCTL_PAGINATION__MAX_LIMIT=50``)
3. ``followctl.toml``, found by :func:`followctl.config.discovery.find_config`
4. defaults on the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from followctl.config.discovery import find_config
from followctl.config.models import DatabaseConfig, PaginationConfig

# pydantic-settings builds sources from a classmethod, so the file chosen
# by from_cli() travels through thread-local state for one construction.
_pending = threading.local()


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``followctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class FollowSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        root: Base for relative paths: the config file's directory, else cwd.
        config_path: The TOML file that was read, if any.
        db_path: ``--db`` override for the SQLite file.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLLOWCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    db_path: str | None = None

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None))
        return init_settings, env_settings, toml

    @property
    def db_url(self) -> str:
        """``[database].url`` if set, else a SQLite URL for ``--db`` / ``[database].path``."""
        if self.database.url:
            return self.database.url
        path = Path(self.db_path or self.database.path)
        if not path.is_absolute():
            path = self.root / path
        return f"sqlite:///{path}"

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> FollowSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* replaces discovery; a missing file there
        means "no config". Flags passed as None are left out so they never
        shadow env or TOML values.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        flags = {name: value for name, value in cli_flags.items() if value is not None}
        _pending.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **flags)
        finally:
            _pending.toml_path = None
