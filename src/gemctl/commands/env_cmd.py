"""Command: diagnostic report for bug reports."""

from __future__ import annotations

import platform
import sys
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl import __version__

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def env(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    settings = app.settings
    environment = app.environment
    lines = [
        "## Environment",
        "",
        f"gemctl    {__version__}",
        f"Python    {platform.python_version()} ({sys.executable})",
        f"Platform  {platform.platform()}",
        f"Command   gemctl {' '.join(app.raw_args)}",
        f"Root      {environment.root}",
        f"Gemfile   {environment.gemfile_path or '<none>'}",
        f"Path      {environment.installed.path}",
        f"Cache     {environment.cache.path}",
        "",
        "## Settings",
        "",
    ]
    for key, value in settings.model_dump(exclude={"root", "gemfile"}).items():
        lines.append(f"{key:<13} {value}")

    gemfile = environment.gemfile_path
    if gemfile is not None and gemfile.is_file():
        lines += ["", "## Gemfile", "", gemfile.read_text(encoding="utf-8").rstrip()]

    app.shell.info("\n".join(lines))
