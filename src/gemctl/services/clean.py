"""CleanService — remove installed gems the Gemfile no longer declares."""

from __future__ import annotations

import logging

from gemctl.services.base import BaseService, timed
from gemctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class CleanService(BaseService):
    @timed
    def clean(self, *, dry_run: bool = False, force: bool = False) -> ServiceResult:
        """Delete unused gems from the install path.

        Refuses to run against the default install path unless *force* is
        given, since that path may be shared.
        """
        if not force and not self.env.settings.path:
            return ServiceResult.failure(
                "clean",
                "PATH_NOT_SET",
                "Cleaning all the gems on your system is dangerous! If you're sure "
                "you want to remove every gem not in this bundle, run "
                "`gemctl clean --force`.",
            )

        declared = set(self.env.definition.gemfile.names())
        verb = "Would have removed" if dry_run else "Removing"
        lines: list[str] = []
        removed: list[str] = []
        for spec in self.env.installed.specs():
            if spec.name in declared:
                continue
            if not dry_run:
                self.env.installed.remove(spec.name)
            removed.append(spec.name)
            lines.append(f"{verb} {spec.full_name}")

        logger.debug("clean removed=%s dry_run=%s", removed, dry_run)
        return ServiceResult(
            ok=True,
            op="clean",
            data={"lines": lines, "removed": removed, "dry_run": dry_run},
        )
