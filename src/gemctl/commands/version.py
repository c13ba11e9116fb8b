"""Command: print the gemctl version."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl import __version__

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def version(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    app.shell.info(f"gemctl version {__version__}")
