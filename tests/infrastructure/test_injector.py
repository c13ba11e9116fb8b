"""Tests for Gemfile add/remove edits."""

from __future__ import annotations

from pathlib import Path

import pytest

from gemctl.domain.gemfile import parse_gemfile
from gemctl.errors import InvalidOptionError
from gemctl.infrastructure.injector import add_gem, remove_gems


class TestRemoveGems:
    def test_removes_declarations(self, project: Path) -> None:
        gemfile = project / "Gemfile"
        assert remove_gems(gemfile, ["rspec"]) == ["rspec"]
        assert parse_gemfile(gemfile.read_text()).names() == ["rack"]

    def test_keeps_comments_and_sources(self, project: Path) -> None:
        gemfile = project / "Gemfile"
        remove_gems(gemfile, ["rack"])
        text = gemfile.read_text()
        assert 'source "https://rubygems.org"' in text
        assert "# web" in text

    def test_unknown_gem_leaves_file_untouched(self, project: Path) -> None:
        gemfile = project / "Gemfile"
        before = gemfile.read_text()
        with pytest.raises(InvalidOptionError, match="`nope` is not specified in Gemfile"):
            remove_gems(gemfile, ["rack", "nope"])
        assert gemfile.read_text() == before

    def test_several_unknown(self, project: Path) -> None:
        with pytest.raises(InvalidOptionError, match="`a`, `b` are not specified"):
            remove_gems(project / "Gemfile", ["a", "b"])


class TestAddGem:
    def test_appends_line(self, project: Path) -> None:
        gemfile = project / "Gemfile"
        line = add_gem(gemfile, "puma", ["~> 6.0"])
        assert line == 'gem "puma", "~> 6.0"'
        assert gemfile.read_text().endswith('gem "puma", "~> 6.0"\n')
        assert parse_gemfile(gemfile.read_text()).names() == ["rack", "rspec", "puma"]

    def test_missing_trailing_newline(self, tmp_path: Path) -> None:
        gemfile = tmp_path / "Gemfile"
        gemfile.write_text('gem "rack"')
        add_gem(gemfile, "puma")
        assert gemfile.read_text() == 'gem "rack"\ngem "puma"\n'

    def test_duplicate(self, project: Path) -> None:
        with pytest.raises(InvalidOptionError, match="same gem twice"):
            add_gem(project / "Gemfile", "rack")
