"""Rewrite argument vectors that carry a help flag into ``help <command>``.

``gemctl install --help`` becomes ``gemctl help install``.  The one
ambiguous case is exec: ``gemctl exec --help`` (or ``--help exec``) asks
for exec's own help, while ``gemctl exec rspec --help`` must reach rspec,
so only a help flag directly adjacent to a leading exec token is rewritten.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from gemctl.errors import UnknownCommandError

HELP_FLAGS = ("--help", "-h")
EXEC_ALIASES = ("e", "ex", "exe", "exec")


def _first_index(args: Sequence[str], tokens: Collection[str]) -> int | None:
    for index, arg in enumerate(args):
        if arg in tokens:
            return index
    return None


def wants_help(args: Sequence[str]) -> bool:
    """True when *args* should go through :func:`reformat_help_args`.

    A lone help flag, or help flags with nothing but other options, is left
    to the root command's own ``--help``.
    """
    if _first_index(args, HELP_FLAGS) is None:
        return False
    return any(not arg.startswith("-") for arg in args)


def reformat_help_args(args: Sequence[str], known_commands: Collection[str]) -> list[str]:
    """Return the canonical form of a help request.

    Raises:
        UnknownCommandError: If no token names a known command.
    """
    help_used = _first_index(args, HELP_FLAGS)
    exec_used = _first_index(args, EXEC_ALIASES)
    if help_used is not None and exec_used is not None:
        if help_used + exec_used == 1:
            return ["help", "exec"]
        return list(args)

    command = next((arg for arg in args if arg in known_commands), None)
    if command is None:
        raise UnknownCommandError(args)
    return ["help", command]
