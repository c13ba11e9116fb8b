"""BundleEnvironment — the per-invocation view of the project.

The environment owns the resolved paths and a lazily parsed
:class:`Definition`.  It is never mutated to "forget" cached state:
:meth:`BundleEnvironment.reset` returns a brand-new environment, so any
code holding the old one keeps a consistent (if stale) view and code that
asks the :class:`~gemctl.commands._context.AppContext` again gets the
fresh one.
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from gemctl.domain.gemfile import Dependency, Gemfile, parse_gemfile
from gemctl.errors import GemctlError, GemfileNotFoundError, MissingDependencyError
from gemctl.infrastructure.gemstore import GemStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gemctl.config.settings import GemctlSettings
    from gemctl.domain.specs import GemSpec

logger = logging.getLogger(__name__)


class Definition:
    """The dependency set declared by a Gemfile, bound to an install path."""

    def __init__(self, gemfile: Gemfile, installed: GemStore) -> None:
        self.gemfile = gemfile
        self.installed = installed

    @property
    def dependencies(self) -> tuple[Dependency, ...]:
        return self.gemfile.dependencies

    def requested(
        self,
        *,
        without: Iterable[str] = (),
        with_groups: Iterable[str] = (),
    ) -> list[Dependency]:
        """Dependencies after applying ``--without``/``--with`` group filters.

        ``--with`` re-includes groups that ``--without`` excluded.
        """
        excluded = set(without) - set(with_groups)
        return [dep for dep in self.dependencies if not set(dep.groups) <= excluded]

    def missing(self) -> list[Dependency]:
        """Dependencies with no installed gem."""
        return [dep for dep in self.dependencies if dep.name not in self.installed]

    def specs(self) -> list[GemSpec]:
        """Materialize the dependency set against the install path.

        Raises:
            MissingDependencyError: For the first declared gem that is not
                installed.
        """
        resolved: list[GemSpec] = []
        for dep in self.dependencies:
            spec = self.installed.get(dep.name)
            if spec is None:
                msg = f"Could not find gem '{dep}' in locally installed gems."
                raise MissingDependencyError(msg, gem=dep.name)
            resolved.append(spec)
        return resolved


class BundleEnvironment:
    """Resolved project paths plus the lazily loaded definition."""

    def __init__(self, settings: GemctlSettings) -> None:
        self.settings = settings
        self.root: Path = settings.root
        self.gemfile_path: Path | None = settings.gemfile
        self.installed = GemStore(settings.install_path)
        self.cache = GemStore(settings.gem_cache_path)

    def __repr__(self) -> str:
        return f"BundleEnvironment(root={str(self.root)!r})"

    def require_gemfile(self) -> Path:
        """Return the Gemfile path or raise if there is none."""
        if self.gemfile_path is None or not self.gemfile_path.is_file():
            raise GemfileNotFoundError("Could not locate Gemfile")
        return self.gemfile_path

    @cached_property
    def definition(self) -> Definition:
        """Parse the Gemfile on first access."""
        path = self.require_gemfile()
        logger.debug("Loading definition from %s", path)
        try:
            gemfile = parse_gemfile(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise GemctlError(f"There was an error parsing `{path.name}`: {exc}") from exc
        return Definition(gemfile, self.installed)

    def reset(self) -> BundleEnvironment:
        """Return a fresh environment built from the same settings."""
        logger.debug("Resetting bundle environment for %s", self.root)
        return BundleEnvironment(self.settings)
