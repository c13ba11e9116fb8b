"""Command: print effective configuration values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.errors import InvalidOptionError

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def config(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    values = app.settings.model_dump()
    if args:
        key = args[0].replace("-", "_")
        if key not in values:
            raise InvalidOptionError(f"Unknown setting: {args[0]}")
        app.shell.info(f"{args[0]}: {values[key]}")
        return

    source = app.settings.config_path or "defaults and environment"
    app.shell.info(f"Settings are listed in order of priority (from {source}):")
    for key, value in values.items():
        app.shell.info(f"{key}: {value}")
