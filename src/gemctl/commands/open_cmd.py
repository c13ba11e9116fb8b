"""Command: open a bundled gem's directory in the user's editor."""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.errors import GemctlError
from gemctl.infrastructure.process import run_program

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext

EDITOR_ENV_VARS = ("GEMCTL_EDITOR", "VISUAL", "EDITOR")


def open_gem(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    name = args[0]
    editor = next((os.environ[var] for var in EDITOR_ENV_VARS if os.environ.get(var)), None)
    if editor is None:
        raise GemctlError("To open a bundled gem, set $EDITOR or $GEMCTL_EDITOR")

    spec = next((s for s in app.environment.definition.specs() if s.name == name), None)
    if spec is None:
        raise GemctlError(f"Could not find gem '{name}'.")

    try:
        status = run_program([*shlex.split(editor), str(spec.path)])
    except OSError as exc:
        raise GemctlError(f"Could not run '{editor} {spec.path}': {exc}") from exc
    if status != 0:
        raise GemctlError(f"Could not run '{editor} {spec.path}'")
