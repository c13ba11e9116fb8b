"""Command: list loaded plugins and the commands they own."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def plugin(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    manager = app.plugins
    if manager is None:
        app.shell.info(
            "Plugins are disabled. Enable them with GEMCTL_PLUGINS=1 "
            "or `plugins = true` in .gemctl/config.toml."
        )
        return

    owned = manager.commands()
    names = manager.list_plugin_names()
    if not names:
        app.shell.info("No plugins installed.")
        return
    for name in names:
        commands = sorted(cmd for cmd, owner in owned.items() if owner == name)
        app.shell.info(f"{name}: {', '.join(commands) or '(no commands)'}")
