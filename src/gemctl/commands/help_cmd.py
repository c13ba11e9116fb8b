"""Command: help for gemctl or one of its commands.

Also shows the help of external ``gemctl-<command>`` programs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import click

from gemctl.errors import UnknownCommandError
from gemctl.infrastructure.process import run_program

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def help_command(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    root = click.get_current_context().find_root()
    if not args:
        click.echo(root.get_help())
        return

    name = args[0]
    descriptor = app.registry.lookup(name)
    if descriptor is not None:
        command = root.command.get_command(root, descriptor.name)
        with click.Context(command, info_name=descriptor.name, parent=root) as sub:
            click.echo(command.get_help(sub))
        return

    ref = app.dispatcher().external_ref(name)
    if ref is not None:
        raise SystemExit(run_program([ref.path, "--help"]))

    raise UnknownCommandError(name)
