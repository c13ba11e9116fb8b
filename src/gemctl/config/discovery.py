"""Locate the project's Gemfile and its gemctl config file.

The Gemfile is searched for from the working directory upwards, the way
git finds ``.git``.  Its directory is the project root; the config file
sits at ``.gemctl/config.toml`` beneath it unless ``GEMCTL_CONFIG`` names
another file.
"""

from __future__ import annotations

import os
from pathlib import Path

GEMFILE_NAME = "Gemfile"
CONFIG_DIRNAME = ".gemctl"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "GEMCTL_CONFIG"


def find_gemfile(start: Path | None = None) -> Path | None:
    """Nearest Gemfile at or above *start* (default: cwd), or None."""
    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / GEMFILE_NAME
        if candidate.is_file():
            return candidate
    return None


def find_config(root: Path) -> Path | None:
    """Config file for *root*, or None when there is none.

    A ``GEMCTL_CONFIG`` path that does not exist yields None rather than
    falling back to the project file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override).expanduser()
    else:
        candidate = root / CONFIG_DIRNAME / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
