"""Locate and read ``followctl.toml``.

Lookup order: the ``FOLLOWCTL_CONFIG`` env var (exclusive when set), then
the start directory and each of its ancestors, git-style.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from followctl.config.models import FollowConfig

CONFIG_FILENAME = "followctl.toml"
CONFIG_ENV_VAR = "FOLLOWCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        explicit = Path(override)
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> FollowConfig:
    """Parse *path* (or the discovered file) into a validated FollowConfig.

    No file at all is not an error: every section has code defaults.
    """
    source = path if path is not None else find_config(cwd)
    if source is None:
        return FollowConfig()
    with source.open("rb") as fh:
        return FollowConfig.model_validate(tomllib.load(fh))
