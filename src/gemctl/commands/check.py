"""Command: verify every Gemfile dependency is installed."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.check import CheckService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def check(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    if options.get("path"):
        app.override_settings(path=options["path"])
    app.emit(CheckService(app.environment).check())
