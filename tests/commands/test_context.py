"""Tests for AppContext."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from gemctl.commands._context import AppContext
from gemctl.services.result import ServiceResult


class TestEmit:
    def test_success(self, app: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        app.emit(ServiceResult(ok=True, op="x", data={"lines": ["a"]}, warnings=["w"]))
        captured = capsys.readouterr()
        assert captured.out == "a\n"
        assert captured.err == "w\n"

    def test_quiet_keeps_warnings(
        self, app: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        app.emit(ServiceResult(ok=True, op="x", data={"lines": ["a"]}, warnings=["w"]), quiet=True)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "w\n"

    def test_failure_exits(self, app: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            app.emit(ServiceResult.failure("x", "BAD", "it broke"))
        assert excinfo.value.code == 1
        assert capsys.readouterr().err == "it broke\n"


    def test_meta_only_when_verbose(
        self,
        app_factory: Callable[..., AppContext],
        project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = ServiceResult(ok=True, op="x", meta={"duration_ms": 1.5})
        app_factory(project).emit(result)
        assert "duration_ms" not in capsys.readouterr().err
        app_factory(project, verbose=True).emit(result)
        assert "x duration_ms: 1.5" in capsys.readouterr().err


class TestEnvironmentLifecycle:
    def test_environment_cached(self, app: AppContext) -> None:
        assert app.environment is app.environment

    def test_reset_swaps_environment(self, app: AppContext) -> None:
        old = app.environment
        new = app.reset_environment()
        assert new is not old
        assert app.environment is new

    def test_override_settings_drops_environment(self, app: AppContext, project: Path) -> None:
        old = app.environment
        app.override_settings(path="vendor/bundle")
        assert app.environment is not old
        assert app.environment.installed.path == (project / "vendor" / "bundle").resolve()

    def test_apply_globals_without_changes(self, app: AppContext) -> None:
        env = app.environment
        app.apply_globals(verbose=False, no_color=False, retry=None)
        assert app.environment is env

    def test_apply_globals(self, app: AppContext) -> None:
        app.apply_globals(verbose=True, retry=2)
        assert app.settings.verbose is True
        assert app.settings.retry == 2
        assert app.shell.verbose is True


class TestUseGemfile:
    def test_switches_root_and_exports(
        self,
        app: AppContext,
        tmp_path_factory: pytest.TempPathFactory,
    ) -> None:
        other = tmp_path_factory.mktemp("other")
        (other / "Gemfile").write_text('gem "puma"\n')
        app.use_gemfile(str(other / "Gemfile"))
        assert app.settings.root == other.resolve()
        assert os.environ["GEMCTL_GEMFILE"] == str((other / "Gemfile").resolve())
        assert app.environment.definition.gemfile.names() == ["puma"]

    def test_keeps_global_flags(
        self,
        project: Path,
        app_factory: Callable[..., AppContext],
    ) -> None:
        app = app_factory(project, verbose=True, retry=4)
        app.use_gemfile(str(project / "Gemfile"))
        assert app.settings.verbose is True
        assert app.settings.retry == 4


class TestPlugins:
    def test_disabled_by_default(self, app: AppContext) -> None:
        assert app.plugins is None

    def test_enabled(
        self,
        project: Path,
        monkeypatch: pytest.MonkeyPatch,
        app_factory: Callable[..., AppContext],
    ) -> None:
        monkeypatch.setenv("GEMCTL_PLUGINS", "1")
        app = app_factory(project)
        assert app.plugins is not None
        assert app.plugins.is_loaded
        assert app.plugins is app.plugins
