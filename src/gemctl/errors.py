"""Error taxonomy for gemctl.

Every user-facing failure is a :class:`click.ClickException` subclass so
Click prints it as ``Error: <message>`` and exits with status 1.  Only
:class:`MissingDependencyError` is ever recovered from, and only by the
auto-install guard.
"""

from __future__ import annotations

from collections.abc import Sequence

import click


class GemctlError(click.ClickException):
    """Base class for all gemctl failures."""

    exit_code = 1


class InvalidOptionError(GemctlError):
    """Malformed or missing user input."""


class UnknownCommandError(GemctlError):
    """No internal, plugin, or external handler matches the command."""

    def __init__(self, args: Sequence[str] | str) -> None:
        self.args_given = [args] if isinstance(args, str) else list(args)
        super().__init__(f'Could not find command "{" ".join(self.args_given)}".')


class MissingDependencyError(GemctlError):
    """A Gemfile dependency is not installed (or not available to install)."""

    def __init__(self, message: str, *, gem: str | None = None) -> None:
        super().__init__(message)
        self.gem = gem


class GemfileNotFoundError(GemctlError):
    """No Gemfile could be located for the current project."""
