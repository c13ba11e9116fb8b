"""Settings for one gemctl invocation.

Values are resolved in this order, first match wins:

1. flags given on the command line
2. ``GEMCTL_*`` environment variables (``GEMCTL_AUTO_INSTALL=1``)
3. the project file found by :func:`gemctl.config.discovery.find_config`
4. field defaults

The project file is plain TOML.  Keys may be written with dashes
(``auto-install = true``) or underscores; keys that do not name a
configurable setting are logged and ignored.
"""

from __future__ import annotations

import logging
import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gemctl.config.discovery import find_config, find_gemfile
from gemctl.errors import GemctlError

GEMFILE_ENV_VAR = "GEMCTL_GEMFILE"

# Derived from the invocation, never read from the project file.
_LOCATION_FIELDS = frozenset({"root", "gemfile", "config_path"})

_project_file: ContextVar[Path | None] = ContextVar("gemctl_project_file", default=None)

logger = logging.getLogger(__name__)


def read_project_file(path: Path, known: frozenset[str] | set[str]) -> dict[str, Any]:
    """Parse *path* and keep the entries that name a field in *known*.

    Raises:
        GemctlError: If the file is not valid TOML.
    """
    try:
        document = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise GemctlError(f"Invalid TOML in {path}: {exc}") from exc

    values: dict[str, Any] = {}
    for key, value in document.items():
        name = key.replace("-", "_")
        if name not in known or name in _LOCATION_FIELDS:
            logger.warning("Ignoring unknown setting %r in %s", key, path)
            continue
        values[name] = value
    return values


class ProjectFileSource(PydanticBaseSettingsSource):
    """Settings source over the project's TOML file, if one was found."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self.path = path
        self.values = read_project_file(path, set(settings_cls.model_fields)) if path else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self.values)


class GemctlSettings(BaseSettings):
    """Settings for a single gemctl invocation.

    Frozen after construction.  A fresh copy with overrides is produced by
    :meth:`with_overrides` when command-level global flags are given.

    Attributes:
        root: Project root (directory holding the Gemfile, or CWD).
        gemfile: Resolved Gemfile path; None when no Gemfile exists yet.
        config_path: The TOML file the settings were read from, if any.
        path: Install path override (relative paths resolve against root).
        cache_path: Gem cache directory override.
        auto_install: Install missing gems before commands that need them.
        plugins: Enable plugin command resolution.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GEMCTL_",
    }

    root: Path = Field(default_factory=Path.cwd)
    gemfile: Path | None = None
    config_path: Path | None = None

    verbose: bool = False
    no_color: bool = False
    log_json: bool = False
    retry: int | None = None

    path: str | None = None
    cache_path: str | None = None
    auto_install: bool = False
    plugins: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        project_file = ProjectFileSource(settings_cls, _project_file.get())
        return init_settings, env_settings, project_file

    @classmethod
    def from_cli(
        cls,
        *,
        root: Path | None = None,
        gemfile: str | None = None,
        **cli_flags: Any,
    ) -> GemctlSettings:
        """Construct settings from a CLI invocation.

        The Gemfile is *gemfile* if given, else ``GEMCTL_GEMFILE``, else the
        nearest one above *root*; its directory becomes the project root.
        Flags left at None or False do not mask environment or file values.
        """
        override = gemfile or os.environ.get(GEMFILE_ENV_VAR)
        if override:
            gemfile_path: Path | None = Path(override).expanduser().resolve()
        else:
            gemfile_path = find_gemfile(root)
        if gemfile_path is not None:
            project_root = gemfile_path.parent
        else:
            project_root = (root or Path.cwd()).resolve()

        config_path = find_config(project_root)
        token = _project_file.set(config_path)
        try:
            return cls(
                root=project_root,
                gemfile=gemfile_path,
                config_path=config_path,
                **_given(cli_flags),
            )
        finally:
            _project_file.reset(token)

    def with_overrides(self, **overrides: Any) -> GemctlSettings:
        """Return a copy with the given non-empty overrides applied."""
        update = _given(overrides)
        return self.model_copy(update=update) if update else self

    @property
    def install_path(self) -> Path:
        """Directory gems are installed into."""
        if self.path:
            return (self.root / self.path).resolve()
        return self.root / ".bundle" / "gems"

    @property
    def gem_cache_path(self) -> Path:
        """Directory gems are installed from."""
        if self.cache_path:
            return (self.root / self.cache_path).resolve()
        return self.root / "vendor" / "cache"


def _given(flags: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in flags.items() if value is not None and value is not False}
