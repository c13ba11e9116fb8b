"""Command: list gems with newer versions in the gem cache.

Exits 1 when anything is outdated, so it can gate CI.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.show import ShowService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def outdated(app: AppContext, options: Mapping[str, Any], gems: Sequence[str]) -> None:
    level = next((lvl for lvl in ("major", "minor", "patch") if options.get(lvl)), None)
    result = ShowService(app.environment).outdated(
        gems,
        pre=bool(options.get("pre")),
        level=level,
        parseable=bool(options.get("parseable")),
    )
    app.emit(result)
    if result.data.get("outdated"):
        raise SystemExit(1)
