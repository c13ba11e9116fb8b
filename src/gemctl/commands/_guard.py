"""Auto-install guard: repair a bundle with missing gems before a command.

Enabled with the ``auto_install`` setting.  Runs once, before the
command's handler, and only for :data:`AUTO_INSTALL_COMMANDS`.  ``install``
is not in that set, so the repair cannot trigger itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gemctl.errors import MissingDependencyError

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext

AUTO_INSTALL_COMMANDS = frozenset(
    {"show", "binstubs", "outdated", "exec", "open", "console", "licenses", "clean"}
)
INSTALL_COMMAND = "install"

logger = logging.getLogger(__name__)


def auto_install(app: AppContext, command_name: str) -> bool:
    """Install missing gems if *command_name* needs a complete bundle.

    Returns True when the install handler ran.  Errors other than
    :class:`MissingDependencyError` propagate unchanged.
    """
    if command_name not in AUTO_INSTALL_COMMANDS:
        return False
    if not app.settings.auto_install:
        return False

    try:
        app.environment.definition.specs()
    except MissingDependencyError as exc:
        logger.debug("Auto-install triggered by %s: %s", command_name, exc.message)
        app.shell.info("Automatically installing missing gems.")
        app.reset_environment()
        install = app.registry[INSTALL_COMMAND]
        install.invoke(app, install.default_options(), ())
        app.reset_environment()
        return True
    return False
