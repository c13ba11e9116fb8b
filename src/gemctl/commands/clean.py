"""Command: remove installed gems that the Gemfile no longer declares."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.clean import CleanService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def clean(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    result = CleanService(app.environment).clean(
        dry_run=bool(options.get("dry_run")), force=bool(options.get("force"))
    )
    app.emit(result)
