"""Command: install the bundle from the gem cache."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gemctl.services.install import InstallService

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext


def install(app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> None:
    """Install every Gemfile dependency that is not installed yet."""
    if options.get("path"):
        app.override_settings(path=options["path"])

    quiet = bool(options.get("quiet"))
    result = InstallService(app.environment).install(
        force=bool(options.get("force")),
        without=options.get("without") or (),
        with_groups=options.get("with") or (),
        retry=app.settings.retry,
    )
    app.emit(result, quiet=quiet)

    if options.get("binstubs"):
        from gemctl.services.binstubs import BinstubsService

        names = [spec.name for spec in app.environment.installed.specs() if spec.executables]
        if names:
            app.emit(
                BinstubsService(app.environment).generate(
                    names, path=options["binstubs"], force=True
                ),
                quiet=quiet,
            )

    if options.get("clean"):
        from gemctl.services.clean import CleanService

        app.emit(CleanService(app.environment).clean(force=True), quiet=quiet)
