"""AppContext — the per-invocation context shared by every command.

Created once by the root group (see :func:`ensure_app_context`) and
reached by handlers as their first argument.  Holds the settings, the
command registry, the user shell, and the current
:class:`~gemctl.infrastructure.environment.BundleEnvironment`.

The environment is the only state that changes after parsing:
:meth:`AppContext.reset_environment` swaps in a freshly built one.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from gemctl.config.logging import configure_logging
from gemctl.config.settings import GEMFILE_ENV_VAR, GemctlSettings
from gemctl.output.console import Shell
from gemctl.output.formatters import format_result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gemctl.commands._dispatch import Dispatcher
    from gemctl.commands._registry import CommandRegistry
    from gemctl.infrastructure.environment import BundleEnvironment
    from gemctl.plugins.manager import PluginManager
    from gemctl.services.result import ServiceResult

GEMDEPS_ENV_VAR = "RUBYGEMS_GEMDEPS"
RAW_ARGS_META_KEY = "gemctl.raw_args"
LOCAL_PLUGIN_DIR = Path(".gemctl") / "plugins"


class AppContext:
    """Shared context flowing from the root group to every handler."""

    def __init__(
        self,
        settings: GemctlSettings,
        *,
        registry: CommandRegistry,
        raw_args: Sequence[str] = (),
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.raw_args = tuple(raw_args)
        self._env: BundleEnvironment | None = None
        self._plugins: PluginManager | None = None
        self._configure_output()

        if os.environ.get(GEMDEPS_ENV_VAR):
            self.shell.warn(
                f"The {GEMDEPS_ENV_VAR} environment variable is set. This enables "
                "RubyGems' experimental Gemfile mode, which may conflict with gemctl "
                f"and cause unexpected errors. To remove this warning, unset {GEMDEPS_ENV_VAR}."
            )

    def _configure_output(self) -> None:
        self.shell = Shell(no_color=self.settings.no_color, verbose=self.settings.verbose)
        configure_logging(
            verbose=self.settings.verbose,
            log_json=self.settings.log_json,
            no_color=self.settings.no_color,
        )

    # ------------------------------------------------------------------
    # Settings overrides applied while parsing a command
    # ------------------------------------------------------------------

    def apply_globals(self, **flags: Any) -> None:
        """Merge global flags given after the command name."""
        updated = self.settings.with_overrides(**flags)
        if updated is self.settings:
            return
        self.settings = updated
        self._env = None
        self._configure_output()

    def override_settings(self, **overrides: Any) -> None:
        """Apply command options that change where the bundle lives."""
        updated = self.settings.with_overrides(**overrides)
        if updated is not self.settings:
            self.settings = updated
            self._env = None

    def use_gemfile(self, gemfile: str) -> None:
        """Switch to *gemfile*, re-deriving root and project config.

        The resolved path is exported as ``GEMCTL_GEMFILE`` so child
        processes see the same bundle.
        """
        flags = self.settings.model_dump(include={"verbose", "no_color", "log_json", "retry"})
        self.settings = GemctlSettings.from_cli(gemfile=gemfile, **flags)
        if self.settings.gemfile is not None:
            os.environ[GEMFILE_ENV_VAR] = str(self.settings.gemfile)
        self._env = None

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @property
    def environment(self) -> BundleEnvironment:
        """The current bundle environment (created lazily)."""
        if self._env is None:
            from gemctl.infrastructure.environment import BundleEnvironment

            self._env = BundleEnvironment(self.settings)
        return self._env

    def reset_environment(self) -> BundleEnvironment:
        """Discard the cached environment and return a freshly built one."""
        self._env = self.environment.reset()
        return self._env

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @property
    def plugins(self) -> PluginManager | None:
        """Loaded plugin manager, or None when plugins are disabled."""
        if not self.settings.plugins:
            return None
        if self._plugins is None:
            from gemctl.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(local_dir=self.settings.root / LOCAL_PLUGIN_DIR)
        return self._plugins

    def dispatcher(self) -> Dispatcher:
        from gemctl.commands._dispatch import Dispatcher

        return Dispatcher(self.registry, plugins=self.plugins)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def emit(self, result: ServiceResult, *, quiet: bool = False) -> None:
        """Print a ServiceResult with correct exit semantics.

        * Success: message and lines to stdout (suppressed when *quiet*),
          warnings to stderr.
        * Failure: error to stderr, exit with code 1.
        * Verbose: ``meta`` entries to stderr first.
        """
        output = format_result(result, verbose=self.settings.verbose)
        for key, value in (result.meta or {}).items():
            self.shell.debug(f"{result.op} {key}: {value}")
        if result.ok:
            if output and not quiet:
                self.shell.info(output)
            for warning in result.warnings:
                self.shell.warn(warning)
        else:
            self.shell.error(output)
            raise SystemExit(1)


def ensure_app_context(ctx: click.Context) -> AppContext:
    """Return the invocation's AppContext, creating it from root params.

    Command resolution happens before the root callback runs, so whichever
    of the two needs the context first builds it.  A context supplied by
    the caller (``obj=`` in tests) is used as is.
    """
    root = ctx.find_root()
    if isinstance(root.obj, AppContext):
        return root.obj

    params = root.params
    settings = GemctlSettings.from_cli(
        verbose=params.get("verbose"),
        no_color=params.get("no_color"),
        retry=params.get("retry"),
        log_json=params.get("log_json"),
    )
    root.obj = AppContext(
        settings,
        registry=root.command.registry,
        raw_args=root.meta.get(RAW_ARGS_META_KEY, ()),
    )
    return root.obj
