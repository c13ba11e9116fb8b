"""Gemfile parsing and line-level editing.

The supported grammar is intentionally small::

    source "https://rubygems.org"
    gem "rack", "~> 3.0"
    gem "rspec", group: :test
    gem "pry", groups: [:development, :test]

Everything else (comments, blank lines, unrecognised statements) is kept
verbatim when the manifest is edited.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, Field

DEFAULT_GROUP = "default"

_GEM_RE = re.compile(r"""^\s*gem\s*\(?\s*(["'])(?P<name>[^"']+)\1(?P<rest>.*)$""")
_SOURCE_RE = re.compile(r"""^\s*source\s*\(?\s*(["'])(?P<url>[^"']+)\1""")
_STRING_RE = re.compile(r"""(["'])([^"']*)\1""")
_GROUP_RE = re.compile(r"""\bgroup:\s*:(\w+)|:group\s*=>\s*:(\w+)""")
_GROUPS_RE = re.compile(r"""\bgroups:\s*\[([^\]]*)\]""")


class Dependency(BaseModel):
    """A single ``gem`` declaration."""

    model_config = {"frozen": True}

    name: str
    requirements: tuple[str, ...] = ()
    groups: tuple[str, ...] = (DEFAULT_GROUP,)
    line: int = 0

    def in_groups(self, groups: Iterable[str]) -> bool:
        return bool(set(self.groups) & set(groups))

    def __str__(self) -> str:
        if self.requirements:
            return f"{self.name} ({', '.join(self.requirements)})"
        return self.name


class Gemfile(BaseModel):
    """Parsed view of a Gemfile."""

    model_config = {"frozen": True}

    sources: tuple[str, ...] = ()
    dependencies: tuple[Dependency, ...] = Field(default_factory=tuple)

    def names(self) -> list[str]:
        return [dep.name for dep in self.dependencies]

    def get(self, name: str) -> Dependency | None:
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None


def _parse_groups(rest: str) -> tuple[str, ...]:
    groups: list[str] = []
    for match in _GROUP_RE.finditer(rest):
        groups.append(match.group(1) or match.group(2))
    for match in _GROUPS_RE.finditer(rest):
        groups.extend(g.strip().lstrip(":") for g in match.group(1).split(",") if g.strip())
    return tuple(groups) or (DEFAULT_GROUP,)


def _parse_requirements(rest: str) -> tuple[str, ...]:
    # Requirements are the string literals before the first keyword argument.
    head = re.split(r"\w+:\s|:\w+\s*=>", rest, maxsplit=1)[0]
    return tuple(m.group(2) for m in _STRING_RE.finditer(head))


def parse_gemfile(text: str) -> Gemfile:
    """Parse Gemfile *text* into sources and dependencies.

    Raises:
        ValueError: If the same gem is declared twice.
    """
    sources: list[str] = []
    deps: list[Dependency] = []
    seen: set[str] = set()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0] if not raw.lstrip().startswith("#") else ""
        if not line.strip():
            continue
        source = _SOURCE_RE.match(line)
        if source:
            sources.append(source.group("url"))
            continue
        gem = _GEM_RE.match(line)
        if gem is None:
            continue
        name = gem.group("name")
        if name in seen:
            msg = f"You cannot specify the same gem twice: '{name}' (line {lineno})"
            raise ValueError(msg)
        seen.add(name)
        rest = gem.group("rest")
        deps.append(
            Dependency(
                name=name,
                requirements=_parse_requirements(rest),
                groups=_parse_groups(rest),
                line=lineno,
            )
        )
    return Gemfile(sources=tuple(sources), dependencies=tuple(deps))


def declared_gem(line: str) -> str | None:
    """Return the gem name declared on *line*, or None."""
    match = _GEM_RE.match(line)
    return match.group("name") if match else None


def render_gem_line(name: str, requirements: Iterable[str] = ()) -> str:
    """Render a ``gem`` declaration line."""
    parts = [f'"{name}"', *(f'"{req}"' for req in requirements)]
    return f"gem {', '.join(parts)}"


def without_gems(text: str, names: Iterable[str]) -> str:
    """Return *text* with the declarations of *names* removed."""
    doomed = set(names)
    kept = [line for line in text.splitlines(keepends=True) if declared_gem(line) not in doomed]
    return "".join(kept)
