"""Spawning external programs.

gemctl never replaces its own process image.  External commands and
``gemctl exec`` both spawn a child that inherits stdin/stdout/stderr and
the environment, wait for it, and report its exit status so the caller
can exit with exactly the same code.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


def which(program: str, search_path: Sequence[str] | None = None) -> str | None:
    """Return the absolute path of *program* on *search_path* (default ``$PATH``)."""
    path = os.pathsep.join(search_path) if search_path is not None else None
    found = shutil.which(program, path=path)
    return os.path.abspath(found) if found else None


def exit_status(returncode: int) -> int:
    """Translate a ``subprocess`` return code into a shell exit status.

    A child killed by signal N is reported as ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_program(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    close_fds: bool = True,
) -> int:
    """Run *argv* to completion with inherited standard streams.

    Returns the child's exit status.

    Raises:
        FileNotFoundError: If the program does not exist.
        PermissionError: If the program is not executable.
    """
    logger.debug("Spawning %s", list(argv))
    previous = signal.getsignal(signal.SIGINT)
    # The child owns Ctrl-C while it runs; we only wait for it.
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        completed = subprocess.run(
            list(argv),
            env=dict(env) if env is not None else None,
            close_fds=close_fds,
            check=False,
        )
    finally:
        signal.signal(signal.SIGINT, previous)
    status = exit_status(completed.returncode)
    logger.debug("%s exited with status %d", argv[0], status)
    return status
