"""GemStore — a directory of gem directories.

Used for both the install path (what is installed) and the gem cache
(what can be installed).  One subdirectory per gem, named after the gem.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from gemctl.domain.specs import GemSpec
from gemctl.errors import GemctlError

logger = logging.getLogger(__name__)


def _load(gem_dir: Path) -> GemSpec:
    try:
        return GemSpec.from_directory(gem_dir)
    except ValueError as exc:
        raise GemctlError(f"There was an error loading gem `{gem_dir.name}`: {exc}") from exc


class GemStore:
    """Filesystem view over a directory of gems."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"GemStore({str(self.path)!r})"

    def get(self, name: str) -> GemSpec | None:
        """Return the spec for *name*, or None if it is not present."""
        gem_dir = self.path / name
        if not gem_dir.is_dir():
            return None
        return _load(gem_dir)

    def __contains__(self, name: str) -> bool:
        return (self.path / name).is_dir()

    def specs(self) -> list[GemSpec]:
        """All gems in the store, sorted by name."""
        if not self.path.is_dir():
            return []
        return [
            _load(p)
            for p in sorted(self.path.iterdir())
            if p.is_dir() and not p.name.startswith(".")
        ]

    def copy_in(self, spec: GemSpec) -> GemSpec:
        """Copy *spec*'s directory into this store, replacing any existing copy."""
        target = self.path / spec.name
        if target.exists():
            shutil.rmtree(target)
        self.path.mkdir(parents=True, exist_ok=True)
        shutil.copytree(spec.path, target)
        logger.debug("Copied %s into %s", spec.full_name, self.path)
        return _load(target)

    def remove(self, name: str) -> None:
        """Delete *name* from the store. Missing gems are ignored."""
        target = self.path / name
        if target.is_dir():
            shutil.rmtree(target)
            logger.debug("Removed %s from %s", name, self.path)
