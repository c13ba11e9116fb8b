"""Command resolution: registry, then plugins, then external executables.

:meth:`Dispatcher.resolve` returns exactly one of :class:`Internal`,
:class:`Plugin`, :class:`External` or :class:`Unresolved`; the root group
is the single place that acts on the result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from gemctl.infrastructure.process import which

if TYPE_CHECKING:
    from gemctl.commands._registry import CommandRegistry
    from gemctl.commands._schema import CommandDescriptor
    from gemctl.plugins.manager import PluginManager

EXTERNAL_PREFIX = "gemctl"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalCommandRef:
    """An external program found on the search path."""

    path: str


@dataclass(frozen=True)
class Internal:
    descriptor: CommandDescriptor


@dataclass(frozen=True)
class Plugin:
    name: str
    manager: PluginManager


@dataclass(frozen=True)
class External:
    name: str
    ref: ExternalCommandRef


@dataclass(frozen=True)
class Unresolved:
    name: str


Resolution = Union[Internal, Plugin, External, Unresolved]


class Dispatcher:
    """Resolve a command token to the thing that should run it.

    Args:
        registry: Built-in commands.
        plugins: Plugin manager, or None when plugins are disabled.
        search_path: Directories searched for ``gemctl-<name>``
            (default: ``$PATH`` at resolution time).
    """

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        plugins: PluginManager | None = None,
        search_path: Sequence[str] | None = None,
        prefix: str = EXTERNAL_PREFIX,
    ) -> None:
        self.registry = registry
        self.plugins = plugins
        self.search_path = search_path
        self.prefix = prefix

    def resolve(self, name: str) -> Resolution:
        descriptor = self.registry.lookup(name)
        if descriptor is not None:
            return Internal(descriptor)

        if self.plugins is not None and self.plugins.owns(name):
            logger.debug("Command %r is provided by a plugin", name)
            return Plugin(name, self.plugins)

        ref = self.external_ref(name)
        if ref is not None:
            logger.debug("Command %r resolved to external program %s", name, ref.path)
            return External(name, ref)

        return Unresolved(name)

    def external_ref(self, name: str) -> ExternalCommandRef | None:
        """Find ``<prefix>-<name>`` on the search path. Never cached."""
        if not name or name.startswith("-") or "/" in name:
            return None
        path = which(f"{self.prefix}-{name}", self.search_path)
        return ExternalCommandRef(path) if path else None
