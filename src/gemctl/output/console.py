"""Rich-backed user shell for gemctl messages.

Messages for humans go through :class:`Shell`; diagnostics go through
logging.  ``info``/``confirm`` write to stdout, ``warn``/``error`` to
stderr.  In non-TTY environments (tests, pipes) Rich disables color codes
on its own; ``--no-color`` disables them everywhere.
"""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

GEMCTL_THEME = Theme(
    {
        "gem.info": "",
        "gem.confirm": "green",
        "gem.warn": "yellow",
        "gem.error": "bold red",
        "gem.debug": "dim",
    }
)


def create_console(*, stderr: bool = False, no_color: bool = False) -> Console:
    """Create a Console bound to the process's (current) stdout or stderr."""
    return Console(
        stderr=stderr,
        theme=GEMCTL_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
    )


class Shell:
    """Level-aware message sink, one per invocation."""

    def __init__(self, *, no_color: bool = False, verbose: bool = False) -> None:
        self.verbose = verbose
        self._out = create_console(no_color=no_color)
        self._err = create_console(stderr=True, no_color=no_color)

    def info(self, message: str) -> None:
        self._out.print(message, style="gem.info", markup=False)

    def confirm(self, message: str) -> None:
        self._out.print(message, style="gem.confirm", markup=False)

    def warn(self, message: str) -> None:
        self._err.print(message, style="gem.warn", markup=False)

    def error(self, message: str) -> None:
        self._err.print(message, style="gem.error", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._err.print(message, style="gem.debug", markup=False)
