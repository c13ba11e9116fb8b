"""Command: remove gems from the Gemfile, optionally reinstalling after."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.errors import InvalidOptionError
from gemctl.infrastructure.injector import remove_gems
from gemctl.services.install import InstallService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext

logger = logging.getLogger(__name__)


def remove(app: AppContext, options: Mapping[str, Any], gems: Sequence[str]) -> None:
    """Remove *gems* from the Gemfile.

    With ``--install`` the bundle is reinstalled from a freshly loaded
    definition, so the install path matches the edited Gemfile.
    """
    if not gems:
        raise InvalidOptionError("Please specify gems to remove.")

    removed = remove_gems(app.environment.require_gemfile(), gems)
    for name in removed:
        app.shell.info(f"{name} was removed.")

    if options.get("install"):
        env = app.reset_environment()
        logger.debug("Reinstalling after removing %s", removed)
        app.emit(InstallService(env).install(retry=app.settings.retry))
