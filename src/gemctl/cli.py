"""Root CLI group for gemctl and the ``gemctl`` console-script entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import click

from gemctl import __version__
from gemctl.commands import DEFAULT_COMMAND, build_registry
from gemctl.commands._base import GemGroup
from gemctl.commands._context import ensure_app_context
from gemctl.commands._help_args import reformat_help_args, wants_help
from gemctl.errors import GemctlError

registry = build_registry()


@click.group(
    cls=GemGroup,
    registry=registry,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="gemctl")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(ctx: click.Context, **global_flags: object) -> None:
    """gemctl — manage a project's gem dependencies.

    Runs `install` when no command is given.
    """
    ensure_app_context(ctx)
    if ctx.invoked_subcommand is None:
        ctx.invoke(ctx.command.get_command(ctx, DEFAULT_COMMAND))


def prepare_args(args: Sequence[str]) -> list[str]:
    """Rewrite help requests (``install --help``) into ``help install``."""
    if wants_help(args):
        return reformat_help_args(args, registry.names())
    return list(args)


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        try:
            args = prepare_args(args)
        except GemctlError as exc:
            exc.show()
            sys.exit(exc.exit_code)
        cli.main(args=args, prog_name="gemctl")
    finally:
        # Leave the terminal usable even when an unexpected error escapes.
        sys.stdout.flush()
        sys.stderr.flush()
