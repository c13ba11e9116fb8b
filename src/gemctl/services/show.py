"""ShowService — read-only reports over the materialized bundle.

Every report starts from ``definition.specs()``, so a bundle with missing
gems raises :class:`~gemctl.errors.MissingDependencyError` here (which the
auto-install guard will usually have repaired already).
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gemctl.domain.specs import GemSpec, is_prerelease, version_key
from gemctl.services.base import BaseService, timed
from gemctl.services.result import ServiceResult

_LEVELS = {"major": 0, "minor": 1, "patch": 2}


def _changed_segment(installed: str, newest: str) -> int:
    """Index of the first version segment that differs."""
    for index, (old, new) in enumerate(zip(version_key(installed), version_key(newest))):
        if old != new:
            return index
    return min(len(version_key(installed)), len(version_key(newest)))


class ShowService(BaseService):
    @timed
    def show(
        self, name: str | None = None, *, paths: bool = False, outdated: bool = False
    ) -> ServiceResult:
        """List the bundle, or locate one gem.

        With *outdated*, each listed gem also names a newer version waiting
        in the gem cache, if there is one.
        """
        specs = self.env.definition.specs()

        if name is not None:
            if name == "gemctl":
                return ServiceResult(
                    ok=True,
                    op="show",
                    data={"lines": [str(Path(__file__).resolve().parents[1])]},
                )
            for spec in specs:
                if spec.name == name:
                    return ServiceResult(
                        ok=True,
                        op="show",
                        data={"lines": [str(spec.path)], "gem": spec.name, "path": str(spec.path)},
                    )
            return ServiceResult.failure("show", "GEM_NOT_FOUND", f"Could not find gem '{name}'.")

        if paths:
            lines = sorted(str(spec.path) for spec in specs)
            return ServiceResult(ok=True, op="show", data={"lines": lines})

        return ServiceResult(
            ok=True,
            op="show",
            data={
                "message": "Gems included by the bundle:",
                "lines": [self._listing(spec, outdated=outdated) for spec in specs],
                "gems": {spec.name: spec.version for spec in specs},
            },
        )

    def _listing(self, spec: GemSpec, *, outdated: bool) -> str:
        if outdated:
            cached = self.env.cache.get(spec.name)
            if cached is not None and version_key(cached.version) > version_key(spec.version):
                return f"  * {spec.name} ({spec.version}, {cached.version} available)"
        return f"  * {spec.name} ({spec.version})"

    @timed
    def licenses(self) -> ServiceResult:
        specs = sorted(
            self.env.definition.specs(), key=lambda s: ", ".join(s.licenses), reverse=True
        )
        lines: list[str] = []
        warnings: list[str] = []
        for spec in specs:
            if spec.licenses:
                lines.append(f"{spec.name}: {', '.join(spec.licenses)}")
            else:
                warnings.append(f"{spec.name}: Unknown")
        return ServiceResult(ok=True, op="licenses", data={"lines": lines}, warnings=warnings)

    @timed
    def outdated(
        self,
        gems: Sequence[str] = (),
        *,
        pre: bool = False,
        level: str | None = None,
        parseable: bool = False,
    ) -> ServiceResult:
        """Compare installed versions against the gem cache.

        Args:
            gems: Only check these gems.
            pre: Consider prerelease versions.
            level: Only report ``major``, ``minor`` or ``patch`` updates.
            parseable: Minimal formatting, one gem per line.
        """
        specs = self.env.definition.specs()
        if gems:
            specs = [spec for spec in specs if spec.name in gems]

        outdated: dict[str, dict[str, str]] = {}
        lines: list[str] = []
        for spec in specs:
            cached = self.env.cache.get(spec.name)
            if cached is None or version_key(cached.version) <= version_key(spec.version):
                continue
            if is_prerelease(cached.version) and not pre:
                continue
            changed = _changed_segment(spec.version, cached.version)
            if level is not None and changed != _LEVELS[level]:
                continue
            outdated[spec.name] = {"installed": spec.version, "newest": cached.version}
            detail = f"{spec.name} (newest {cached.version}, installed {spec.version})"
            lines.append(detail if parseable else f"  * {detail}")

        if outdated:
            message = "" if parseable else "Outdated gems included in the bundle:"
        else:
            message = "" if parseable else "Bundle up to date!"
        return ServiceResult(
            ok=True,
            op="outdated",
            data={"message": message, "lines": lines, "outdated": outdated},
        )
