"""Injector — add and remove ``gem`` declarations in a Gemfile.

All names are validated before the file is touched, so an invalid request
never leaves a partially edited manifest behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from gemctl.domain.gemfile import parse_gemfile, render_gem_line, without_gems
from gemctl.errors import InvalidOptionError

logger = logging.getLogger(__name__)


def remove_gems(gemfile: Path, gems: Sequence[str]) -> list[str]:
    """Remove every gem in *gems* from *gemfile*.

    Returns the removed names in request order.

    Raises:
        InvalidOptionError: If any gem is not declared in the Gemfile.
    """
    text = gemfile.read_text(encoding="utf-8")
    declared = set(parse_gemfile(text).names())
    unknown = [name for name in gems if name not in declared]
    if unknown:
        names = ", ".join(f"`{name}`" for name in unknown)
        verb = "is" if len(unknown) == 1 else "are"
        msg = f"{names} {verb} not specified in {gemfile.name} so it could not be removed."
        raise InvalidOptionError(msg)

    gemfile.write_text(without_gems(text, gems), encoding="utf-8")
    logger.debug("Removed %s from %s", list(gems), gemfile)
    return list(gems)


def add_gem(gemfile: Path, name: str, requirements: Sequence[str] = ()) -> str:
    """Append a declaration for *name* to *gemfile* and return the new line.

    Raises:
        InvalidOptionError: If *name* is already declared.
    """
    text = gemfile.read_text(encoding="utf-8")
    if parse_gemfile(text).get(name) is not None:
        msg = f"Gem already added: you cannot specify the same gem twice ('{name}')."
        raise InvalidOptionError(msg)

    line = render_gem_line(name, requirements)
    if text and not text.endswith("\n"):
        text += "\n"
    gemfile.write_text(f"{text}{line}\n", encoding="utf-8")
    logger.debug("Added %r to %s", line, gemfile)
    return line
