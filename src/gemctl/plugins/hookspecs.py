"""Pluggy hook specifications for gemctl plugin commands."""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("gemctl")


class GemctlHookSpec:
    """Hook specifications for the gemctl plugin system."""

    @hookspec
    def gemctl_commands(self) -> list[str]:
        """Return the command names this plugin owns."""

    @hookspec(firstresult=True)
    def gemctl_exec_command(self, command: str, args: list[str]) -> int | None:
        """Run *command* with the remaining CLI tokens.

        Only the plugin that owns *command* should answer; return None to
        defer.  The returned integer becomes the process exit status.
        """
