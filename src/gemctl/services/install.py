"""InstallService — install and update gems from the local gem cache."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from gemctl.services.base import BaseService, timed
from gemctl.services.result import ServiceResult

if TYPE_CHECKING:
    from gemctl.domain.gemfile import Dependency
    from gemctl.domain.specs import GemSpec

logger = logging.getLogger(__name__)


class InstallService(BaseService):
    """Copy declared gems from the gem cache into the install path."""

    @timed
    def install(
        self,
        *,
        force: bool = False,
        gems: Sequence[str] | None = None,
        without: Iterable[str] = (),
        with_groups: Iterable[str] = (),
        retry: int | None = None,
        op: str = "install",
    ) -> ServiceResult:
        """Install every requested dependency that is not installed yet.

        Args:
            force: Reinstall gems that are already present.
            gems: Restrict the run to these gem names.
            without: Groups to skip.
            with_groups: Groups to include even if listed in *without*.
            retry: Extra attempts for each failed copy.
        """
        definition = self.env.definition
        deps = definition.requested(without=without, with_groups=with_groups)

        if gems:
            declared = {dep.name for dep in definition.dependencies}
            unknown = [name for name in gems if name not in declared]
            if unknown:
                return ServiceResult.failure(
                    op,
                    "NOT_IN_GEMFILE",
                    f"Could not find gem '{unknown[0]}' in the Gemfile.",
                    gems=unknown,
                )
            deps = [dep for dep in deps if dep.name in gems]

        lines: list[str] = []
        installed: list[str] = []
        using: list[str] = []
        for dep in deps:
            current = self.env.installed.get(dep.name)
            if current is not None and not force:
                using.append(dep.name)
                lines.append(f"Using {current.name} {current.version}")
                continue

            cached = self.env.cache.get(dep.name)
            if cached is None:
                return ServiceResult.failure(
                    op,
                    "GEM_NOT_FOUND",
                    f"Could not find gem '{dep}' in the gem cache at {self.env.cache.path}.",
                    gem=dep.name,
                    installed=installed,
                )

            spec = self._copy_with_retry(cached, dep, attempts=(retry or 0) + 1)
            installed.append(spec.name)
            lines.append(f"Installing {spec.name} {spec.version}")

        total = len(definition.dependencies)
        message = (
            f"Bundle complete! {total} Gemfile "
            f"{'dependency' if total == 1 else 'dependencies'}, "
            f"{len(installed) + len(using)} gems now installed."
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": message,
                "lines": lines,
                "installed": installed,
                "using": using,
                "path": str(self.env.installed.path),
            },
        )

    @timed
    def update(
        self, gems: Sequence[str] = (), *, retry: int | None = None, groups: Iterable[str] = ()
    ) -> ServiceResult:
        """Reinstall *gems* (or every gem in *groups*, or everything)."""
        names = list(gems)
        if groups:
            wanted = set(groups)
            names.extend(
                dep.name
                for dep in self.env.definition.dependencies
                if wanted & set(dep.groups) and dep.name not in names
            )
            if not names:
                return ServiceResult.failure(
                    "update",
                    "NO_GEMS_IN_GROUP",
                    f"No gems in group(s) {', '.join(sorted(wanted))}.",
                )
        return self.install(force=True, gems=names or None, retry=retry, op="update")

    def _copy_with_retry(self, cached: GemSpec, dep: Dependency, *, attempts: int) -> GemSpec:
        attempt = 1
        while True:
            try:
                return self.env.installed.copy_in(cached)
            except OSError:
                if attempt >= attempts:
                    raise
                logger.warning(
                    "Installing %s failed (attempt %d of %d), retrying",
                    dep.name,
                    attempt,
                    attempts,
                    exc_info=True,
                )
                attempt += 1
