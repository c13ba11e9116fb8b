"""Command: generate binstubs for gem executables."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.binstubs import BinstubsService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def binstubs(app: AppContext, options: Mapping[str, Any], gems: Sequence[str]) -> None:
    result = BinstubsService(app.environment).generate(
        gems, path=options.get("path"), force=bool(options.get("force"))
    )
    app.emit(result)
