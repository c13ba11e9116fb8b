"""Shared pytest fixtures for gemctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from gemctl.commands import build_registry
from gemctl.commands._context import AppContext
from gemctl.config.settings import GemctlSettings

GEMCTL_ENV_VARS = (
    "GEMCTL_GEMFILE",
    "GEMCTL_CONFIG",
    "GEMCTL_AUTO_INSTALL",
    "GEMCTL_PLUGINS",
    "GEMCTL_PATH",
    "GEMCTL_CACHE_PATH",
    "GEMCTL_RETRY",
    "GEMCTL_VERBOSE",
    "GEMCTL_NO_COLOR",
    "GEMCTL_EDITOR",
    "RUBYGEMS_GEMDEPS",
)

GEMFILE = """\
source "https://rubygems.org"

# web
gem "rack", "~> 3.0"
gem "rspec", group: :test
"""

GemFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Unset gemctl env vars and restore them (and root logging) afterwards.

    ``setenv`` before ``delenv`` makes monkeypatch record the original
    state, so variables exported by the code under test are undone too.
    """
    for var in GEMCTL_ENV_VARS:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    gemctl_level = logging.getLogger("gemctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("gemctl").setLevel(gemctl_level)


def _make_gem(
    store: Path,
    name: str,
    version: str = "1.0.0",
    *,
    licenses: Sequence[str] = (),
    executables: Sequence[str] = (),
) -> Path:
    gem_dir = store / name
    gem_dir.mkdir(parents=True, exist_ok=True)
    meta = [f'name = "{name}"', f'version = "{version}"']
    if licenses:
        meta.append("licenses = [" + ", ".join(f'"{lic}"' for lic in licenses) + "]")
    (gem_dir / "gem.toml").write_text("\n".join(meta) + "\n", encoding="utf-8")
    for exe in executables:
        exe_path = gem_dir / "exe" / exe
        exe_path.parent.mkdir(exist_ok=True)
        exe_path.write_text(f'#!/bin/sh\necho {exe} "$@"\n', encoding="utf-8")
        exe_path.chmod(0o755)
    return gem_dir


@pytest.fixture
def make_gem() -> GemFactory:
    """Factory: ``make_gem(store, name, version, licenses=..., executables=...)``.

    Creates a gem directory with ``gem.toml`` metadata under *store*.
    """
    return _make_gem


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project with a Gemfile and a gem cache holding every declared gem.

    Nothing is installed yet.
    """
    (tmp_path / "Gemfile").write_text(GEMFILE, encoding="utf-8")
    cache = tmp_path / "vendor" / "cache"
    _make_gem(cache, "rack", "3.0.8", licenses=["MIT"], executables=["rackup"])
    _make_gem(cache, "rspec", "3.12.0")
    return tmp_path


@pytest.fixture
def installed_project(project: Path) -> Path:
    """The :func:`project` with every gem already installed."""
    gems = project / ".bundle" / "gems"
    _make_gem(gems, "rack", "3.0.8", licenses=["MIT"], executables=["rackup"])
    _make_gem(gems, "rspec", "3.12.0")
    return project


@pytest.fixture
def _isolated_project(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI discovers its Gemfile.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(project)


@pytest.fixture
def _isolated_installed_project(
    installed_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(installed_project)


@pytest.fixture
def app_factory() -> Callable[..., AppContext]:
    """Factory: ``app_factory(root, **flags)`` -> AppContext with built-in commands."""

    def factory(root: Path, **flags: object) -> AppContext:
        settings = GemctlSettings.from_cli(root=root, **flags)
        return AppContext(settings, registry=build_registry())

    return factory


@pytest.fixture
def app(project: Path, app_factory: Callable[..., AppContext]) -> AppContext:
    return app_factory(project)
