"""Command: interactive Python console with the bundle preloaded."""

from __future__ import annotations

import code
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl import __version__
from gemctl.errors import GemctlError

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def console(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    group = args[0] if args else None
    env = app.environment
    definition = env.definition
    specs = definition.specs()
    if group is not None:
        names = {dep.name for dep in definition.dependencies if group in dep.groups}
        if not names:
            raise GemctlError(f"Group '{group}' has no gems in the Gemfile.")
        specs = [spec for spec in specs if spec.name in names]

    namespace = {
        "environment": env,
        "definition": definition,
        "specs": {spec.name: spec for spec in specs},
    }
    banner = (
        f"gemctl {__version__} console ({len(specs)} gems loaded)\n"
        f"Available: {', '.join(sorted(namespace))}"
    )
    code.interact(banner=banner, local=namespace, exitmsg="")
