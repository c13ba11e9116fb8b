"""Extension layer — plugin commands via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins in ``.gemctl/plugins/``.
INVARIANT: A broken plugin is a warning, never an error.
"""

from gemctl.plugins.manager import PluginManager

__all__ = ["PluginManager"]
