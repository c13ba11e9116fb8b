"""CheckService — are the Gemfile's dependencies installed?"""

from __future__ import annotations

from gemctl.services.base import BaseService, timed
from gemctl.services.result import ServiceResult


class CheckService(BaseService):
    @timed
    def check(self) -> ServiceResult:
        missing = self.env.definition.missing()
        if missing:
            listing = "\n".join(f" * {dep}" for dep in missing)
            return ServiceResult.failure(
                "check",
                "MISSING_GEMS",
                "The following gems are missing\n"
                f"{listing}\n"
                "Install missing gems with `gemctl install`",
                missing=[dep.name for dep in missing],
            )
        return ServiceResult(
            ok=True,
            op="check",
            data={"message": "The Gemfile's dependencies are satisfied"},
        )
