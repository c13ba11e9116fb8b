"""Tests for GemSpec metadata and version ordering."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from gemctl.domain.specs import GemSpec, is_prerelease, version_key


class TestFromDirectory:
    def test_reads_metadata(self, tmp_path: Path, make_gem: Callable[..., Path]) -> None:
        gem_dir = make_gem(tmp_path, "rack", "3.0.8", licenses=["MIT"], executables=["rackup"])
        spec = GemSpec.from_directory(gem_dir)
        assert spec.name == "rack"
        assert spec.version == "3.0.8"
        assert spec.licenses == ("MIT",)
        assert spec.executables == ("rackup",)
        assert spec.full_name == "rack-3.0.8"
        assert spec.bin_dir == gem_dir / "exe"

    def test_single_license_string(self, tmp_path: Path) -> None:
        gem_dir = tmp_path / "json"
        gem_dir.mkdir()
        (gem_dir / "gem.toml").write_text('license = "Ruby"\n')
        assert GemSpec.from_directory(gem_dir).licenses == ("Ruby",)

    def test_bare_directory(self, tmp_path: Path) -> None:
        gem_dir = tmp_path / "plain"
        gem_dir.mkdir()
        spec = GemSpec.from_directory(gem_dir)
        assert spec.name == "plain"
        assert spec.version == "0"
        assert spec.licenses == ()
        assert spec.executables == ()

    def test_invalid_metadata(self, tmp_path: Path) -> None:
        gem_dir = tmp_path / "broken"
        gem_dir.mkdir()
        (gem_dir / "gem.toml").write_text("version = \n")
        with pytest.raises(ValueError, match="Invalid gem metadata"):
            GemSpec.from_directory(gem_dir)


class TestVersions:
    @pytest.mark.parametrize(
        ("older", "newer"),
        [
            ("1.0.0", "1.0.1"),
            ("1.9", "1.10"),
            ("2.0.0.rc1", "2.0.0"),
            ("1.0", "1.0.1"),
        ],
    )
    def test_ordering(self, older: str, newer: str) -> None:
        assert version_key(older) < version_key(newer)

    def test_prerelease(self) -> None:
        assert is_prerelease("2.0.0.beta1")
        assert is_prerelease("1.0-rc")
        assert not is_prerelease("1.2.3")
