"""Command: append a gem to the Gemfile."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.infrastructure.injector import add_gem

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def add(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    name, *requirements = args
    line = add_gem(app.environment.require_gemfile(), name, requirements)
    app.shell.info(f"Added '{line}' to the Gemfile.")
