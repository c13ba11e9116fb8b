"""Commands: show and licenses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.show import ShowService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def show(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    """List the bundle, or print the path of one gem."""
    name = args[0] if args else None
    result = ShowService(app.environment).show(
        name, paths=bool(options.get("paths")), outdated=bool(options.get("outdated"))
    )
    app.emit(result)


def licenses(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    app.emit(ShowService(app.environment).licenses())
