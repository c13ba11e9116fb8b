"""BinstubsService — generate ``bin/`` wrappers for gem executables.

Each stub re-enters gemctl through ``gemctl exec`` so the executable runs
with the bundle's environment.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Sequence

from gemctl.services.base import BaseService, timed
from gemctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

DEFAULT_BINSTUB_DIR = "bin"

_STUB_TEMPLATE = """\
#!/bin/sh
# This file was generated by gemctl for the '{gem}' gem.
exec gemctl exec {exe} "$@"
"""


class BinstubsService(BaseService):
    @timed
    def generate(
        self,
        gems: Sequence[str],
        *,
        path: str | None = None,
        force: bool = False,
    ) -> ServiceResult:
        if not gems:
            return ServiceResult.failure(
                "binstubs", "NO_GEMS", "`gemctl binstubs` needs at least one gem to run."
            )

        target_dir = self.env.root / (path or DEFAULT_BINSTUB_DIR)
        written: list[str] = []
        warnings: list[str] = []
        for name in gems:
            spec = self.env.installed.get(name)
            if spec is None:
                return ServiceResult.failure(
                    "binstubs", "GEM_NOT_FOUND", f"Could not find gem '{name}'."
                )
            if not spec.executables:
                warnings.append(f"{name} has no executables.")
                continue
            for exe in spec.executables:
                stub = target_dir / exe
                if stub.exists() and not force:
                    warnings.append(
                        f"Skipped {exe} since it already exists. "
                        "Use --force to overwrite it."
                    )
                    continue
                target_dir.mkdir(parents=True, exist_ok=True)
                stub.write_text(_STUB_TEMPLATE.format(gem=name, exe=exe), encoding="utf-8")
                stub.chmod(stub.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
                written.append(str(stub))
                logger.debug("Wrote binstub %s", stub)

        return ServiceResult(
            ok=True,
            op="binstubs",
            data={"binstubs": written},
            warnings=warnings,
        )
