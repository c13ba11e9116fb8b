"""Command: create a Gemfile in the current directory."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gemctl.config.discovery import GEMFILE_NAME
from gemctl.errors import GemctlError

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext

DEFAULT_GEMFILE = """\
source "https://rubygems.org"

# gem "rails"
"""


def init(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    target = Path.cwd() / GEMFILE_NAME
    if target.exists():
        raise GemctlError(f"{GEMFILE_NAME} already exists at {target}")
    target.write_text(DEFAULT_GEMFILE, encoding="utf-8")
    app.shell.confirm(f"Writing new {GEMFILE_NAME} to {target}")
