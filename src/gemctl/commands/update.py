"""Command: reinstall gems from the gem cache."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.install import InstallService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def update(app: AppContext, options: Mapping[str, Any], gems: Sequence[str]) -> None:
    result = InstallService(app.environment).update(
        gems, retry=app.settings.retry, groups=options.get("group") or ()
    )
    app.emit(result, quiet=bool(options.get("quiet")))
