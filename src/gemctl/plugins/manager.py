"""PluginManager — where plugin commands come from and how they run.

Plugins are found two ways: the ``gemctl.plugins`` entry-point group
(pip-installed packages) and single-file modules in a project's
``.gemctl/plugins/`` directory.  A plugin owns commands by returning their
names from ``gemctl_commands``; ``gemctl <name> ...`` is then handed to
that plugin's ``gemctl_exec_command`` with the remaining tokens untouched.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from types import ModuleType

import pluggy

from gemctl.plugins.hookspecs import GemctlHookSpec

PROJECT_NAME = "gemctl"
ENTRY_POINT_GROUP = "gemctl.plugins"
LOCAL_MODULE_PREFIX = "gemctl_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: object) -> bool:
    """Whether *obj* is a class with at least one ``@hookimpl`` method.

    ``HookimplMarker("gemctl")`` tags decorated functions with a
    ``gemctl_impl`` attribute.
    """
    if not inspect.isclass(obj):
        return False
    return any(
        getattr(member, f"{PROJECT_NAME}_impl", None) is not None
        for name, member in inspect.getmembers(obj, callable)
        if not name.startswith("_")
    )


def _load_module(path: Path) -> ModuleType | None:
    """Import *path* under a private module name; None if it fails."""
    module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import local plugin %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        return None
    return module


class PluginManager:
    """Owns the pluggy manager and answers "which plugin runs this command?"."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(GemctlHookSpec)
        self._loaded = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then those in *local_dir*.

        Returns the names of every registered plugin.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            self._load_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _registered(self) -> Iterator[tuple[str, object]]:
        """``(name, plugin)`` pairs in registration order."""
        for name, plugin in self._pm.list_name_plugin():
            if plugin is not None:
                yield name, plugin

    def get_plugins(self) -> list[object]:
        return [plugin for _name, plugin in self._registered()]

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._registered()]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def commands(self) -> dict[str, str]:
        """Map every plugin-owned command name to its plugin's name.

        A plugin whose ``gemctl_commands`` hook raises is skipped with a
        warning.  When two plugins claim a name the first registered wins.
        """
        owned: dict[str, str] = {}
        for plugin_name, plugin in self._registered():
            declare = getattr(plugin, "gemctl_commands", None)
            if declare is None:
                continue
            try:
                names = list(declare() or ())
            except Exception:
                logger.warning(
                    "Failed to collect commands from plugin %s", plugin_name, exc_info=True
                )
                continue
            for name in names:
                owner = owned.setdefault(name, plugin_name)
                if owner != plugin_name:
                    logger.warning(
                        "Plugin %s also claims %r; keeping %s", plugin_name, name, owner
                    )
        return owned

    def owns(self, command: str) -> bool:
        return command in self.commands()

    def exec_command(self, command: str, args: Sequence[str]) -> int:
        """Run *command* in its owning plugin and return the exit status.

        *args* are passed through verbatim.  A plugin that returns None
        counts as success.

        Raises:
            LookupError: If no plugin owns *command*.
        """
        owner = self.commands().get(command)
        plugin = self._pm.get_plugin(owner) if owner is not None else None
        if plugin is None:
            msg = f"No plugin owns command {command!r}"
            raise LookupError(msg)
        logger.debug("Dispatching %r to plugin %s", command, owner)
        status = plugin.gemctl_exec_command(command=command, args=list(args))
        return 0 if status is None else int(status)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def _load_local(self, local_dir: Path) -> None:
        """Register every plugin class defined in ``local_dir/*.py``.

        Files starting with ``_`` are skipped.  A file that fails to import,
        or a class that fails to instantiate, is logged and skipped.
        """
        for path in sorted(local_dir.glob("*.py")):
            if path.name.startswith("_"):
                continue
            module = _load_module(path)
            if module is None:
                continue
            for _name, cls in inspect.getmembers(module, _is_plugin_class):
                if cls.__module__ != module.__name__:
                    continue
                try:
                    self.register_plugin(cls(), name=module.__name__)
                except Exception:
                    logger.warning(
                        "Failed to register plugin class %s from %s",
                        cls.__name__,
                        path,
                        exc_info=True,
                    )

    def _instantiate_entry_point_classes(self) -> None:
        """Swap entry points that registered a class for an instance of it."""
        for name, plugin in list(self._registered()):
            if not _is_plugin_class(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
