"""Locate the chatplus.toml a command should read.

Lookup order: the ``--config`` path, then ``CHATPLUS_CONFIG``, then a
walk up from the working directory the way git finds ``.git/``. An
explicit path that does not exist means "no config", never a fallback
to the walk-up.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "chatplus.toml"
CONFIG_ENV_VAR = "CHATPLUS_CONFIG"


def _existing(path: str) -> Path | None:
    candidate = Path(path).expanduser()
    return candidate if candidate.is_file() else None


def find_config(start: Path | None = None, *, explicit: str | None = None) -> Path | None:
    """Return the config file to load, or None to run on code defaults."""
    if explicit:
        return _existing(explicit)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing(env_path)

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
