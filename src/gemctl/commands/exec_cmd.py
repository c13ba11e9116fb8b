"""Command: run a program with the bundle's executables on PATH.

The child inherits the standard streams; gemctl exits with the child's
exit status (127 when the program cannot be found, 126 when it cannot be
executed).
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.config.settings import GEMFILE_ENV_VAR
from gemctl.errors import InvalidOptionError
from gemctl.infrastructure.process import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    run_program,
    which,
)

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext
    from gemctl.infrastructure.environment import BundleEnvironment


def bundle_env(env: BundleEnvironment) -> dict[str, str]:
    """Process environment for programs run inside the bundle."""
    child = dict(os.environ)
    bin_dirs = [str(spec.bin_dir) for spec in env.definition.specs() if spec.bin_dir.is_dir()]
    child["PATH"] = os.pathsep.join([*bin_dirs, child.get("PATH", "")])
    child[GEMFILE_ENV_VAR] = str(env.require_gemfile())
    return child


def exec_command(app: AppContext, options: Mapping[str, Any], argv: Sequence[str]) -> None:
    if not argv:
        raise InvalidOptionError("gemctl exec needs a command to run")

    child_env = bundle_env(app.environment)
    program = argv[0]
    if os.sep not in program:
        program = which(program, child_env["PATH"].split(os.pathsep)) or ""
    if not program or not os.path.exists(program):
        app.shell.error(f"gemctl: command not found: {argv[0]}")
        raise SystemExit(COMMAND_NOT_FOUND)

    try:
        status = run_program(
            [program, *argv[1:]],
            env=child_env,
            close_fds=not options.get("keep_file_descriptors"),
        )
    except PermissionError:
        app.shell.error(f"gemctl: not executable: {argv[0]}")
        raise SystemExit(COMMAND_NOT_EXECUTABLE) from None
    raise SystemExit(status)
