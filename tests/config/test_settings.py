"""Tests for GemctlSettings resolution and priority."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from gemctl.config.settings import GemctlSettings
from gemctl.errors import GemctlError


def _write_config(root: Path, text: str) -> Path:
    config = root / ".gemctl" / "config.toml"
    config.parent.mkdir(exist_ok=True)
    config.write_text(text, encoding="utf-8")
    return config


class TestFromCli:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path.resolve()
        assert settings.gemfile is None
        assert settings.verbose is False
        assert settings.retry is None
        assert settings.auto_install is False
        assert settings.plugins is False

    def test_root_follows_discovered_gemfile(self, project: Path) -> None:
        nested = project / "lib"
        nested.mkdir()
        settings = GemctlSettings.from_cli(root=nested)
        assert settings.root == project.resolve()
        assert settings.gemfile == (project / "Gemfile").resolve()

    def test_explicit_gemfile(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        (other / "Gems.rb").write_text('gem "rack"\n')
        settings = GemctlSettings.from_cli(root=tmp_path, gemfile=str(other / "Gems.rb"))
        assert settings.gemfile == (other / "Gems.rb").resolve()
        assert settings.root == other.resolve()

    def test_gemfile_env_var(
        self,
        project: Path,
        tmp_path_factory: pytest.TempPathFactory,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        monkeypatch.setenv("GEMCTL_GEMFILE", str(project / "Gemfile"))
        settings = GemctlSettings.from_cli(root=elsewhere)
        assert settings.root == project.resolve()

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path, verbose=True, retry=3)
        assert settings.verbose is True
        assert settings.retry == 3

    def test_unset_flags_do_not_mask_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GEMCTL_VERBOSE", "1")
        settings = GemctlSettings.from_cli(root=tmp_path, verbose=False, retry=None)
        assert settings.verbose is True


class TestPriority:
    def test_toml_values(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, 'auto_install = true\npath = "vendor/bundle"\n')
        settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.auto_install is True
        assert settings.path == "vendor/bundle"
        assert settings.config_path == config

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "retry = 1\n")
        monkeypatch.setenv("GEMCTL_RETRY", "4")
        assert GemctlSettings.from_cli(root=tmp_path).retry == 4

    def test_cli_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMCTL_RETRY", "4")
        assert GemctlSettings.from_cli(root=tmp_path, retry=2).retry == 2

    def test_dashed_keys(self, tmp_path: Path) -> None:
        _write_config(tmp_path, 'auto-install = true\ncache-path = "gems"\n')
        settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.auto_install is True
        assert settings.cache_path == "gems"

    def test_unknown_and_location_keys_ignored(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write_config(tmp_path, 'frobnicate = 1\nroot = "/elsewhere"\n')
        with caplog.at_level("WARNING", logger="gemctl.config.settings"):
            settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path.resolve()
        assert "'frobnicate'" in caplog.text
        assert "'root'" in caplog.text

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "auto_install = = true\n")
        with pytest.raises(GemctlError, match="Invalid TOML"):
            GemctlSettings.from_cli(root=tmp_path)


class TestSettingsObject:
    def test_frozen(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]

    def test_with_overrides_returns_copy(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path)
        updated = settings.with_overrides(verbose=True)
        assert updated.verbose is True
        assert settings.verbose is False

    def test_with_no_overrides_is_identity(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.with_overrides(verbose=False, retry=None) is settings

    def test_default_paths(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path)
        assert settings.install_path == tmp_path.resolve() / ".bundle" / "gems"
        assert settings.gem_cache_path == tmp_path.resolve() / "vendor" / "cache"

    def test_custom_paths(self, tmp_path: Path) -> None:
        settings = GemctlSettings.from_cli(root=tmp_path).with_overrides(
            path="vendor/bundle", cache_path="gems"
        )
        assert settings.install_path == (tmp_path / "vendor" / "bundle").resolve()
        assert settings.gem_cache_path == (tmp_path / "gems").resolve()
