"""Tests for option/command descriptors and their Click translation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import click
import pytest
from click.testing import CliRunner

from gemctl.commands._options import GLOBAL_OPTIONS, OPTION_SCHEMAS
from gemctl.commands._schema import ArgumentSpec, CommandDescriptor, OptionSpec, StringList


def _echo_params(*specs: OptionSpec) -> click.Command:
    def callback(**params: object) -> None:
        click.echo(repr(sorted(params.items())))

    return click.Command("probe", callback=callback, params=[spec.to_click() for spec in specs])


class TestStringList:
    @pytest.mark.parametrize("raw", ["dev test", "dev,test", "dev:test", " dev , test "])
    def test_separators(self, raw: str) -> None:
        assert StringList().convert(raw, None, None) == ["dev", "test"]

    def test_sequence_passthrough(self) -> None:
        assert StringList().convert(("a", "b"), None, None) == ["a", "b"]


class TestOptionSpec:
    def test_dest_and_flags(self) -> None:
        spec = OptionSpec("dry-run", aliases=("-n",))
        assert spec.dest == "dry_run"
        assert spec.flags() == ("--dry-run", "-n")

    def test_boolean(self) -> None:
        result = CliRunner().invoke(_echo_params(OptionSpec("force")), ["--force"])
        assert "('force', True)" in result.output

    def test_numeric(self) -> None:
        result = CliRunner().invoke(_echo_params(OptionSpec("retry", "numeric")), ["--retry", "3"])
        assert "('retry', 3)" in result.output

    def test_lazy_default(self) -> None:
        spec = OptionSpec("binstubs", "string", lazy_default="bin")
        runner = CliRunner()
        assert "('binstubs', 'bin')" in runner.invoke(_echo_params(spec), ["--binstubs"]).output
        assert "('binstubs', 'exe')" in runner.invoke(
            _echo_params(spec), ["--binstubs", "exe"]
        ).output
        assert "('binstubs', None)" in runner.invoke(_echo_params(spec), []).output


class TestCommandDescriptor:
    def test_flag_collision(self) -> None:
        with pytest.raises(ValueError, match="flag '--force'"):
            CommandDescriptor(
                "bad",
                "x:y",
                options=(OptionSpec("force"), OptionSpec("overwrite", aliases=("--force",))),
            )

    def test_default_options(self) -> None:
        descriptor = CommandDescriptor("install", "x:y", options=OPTION_SCHEMAS["install"])
        defaults = descriptor.default_options()
        assert defaults["force"] is False
        assert defaults["binstubs"] is None
        assert defaults["without"] is None

    def test_invoke_callable_handler(self) -> None:
        seen: list[tuple[object, dict[str, object], tuple[str, ...]]] = []

        def handler(app: object, options: Mapping[str, object], args: Sequence[str]) -> str:
            seen.append((app, dict(options), tuple(args)))
            return "done"

        descriptor = CommandDescriptor("probe", handler, arguments=(ArgumentSpec("gem"),))
        assert descriptor.invoke("app", {"a": 1}, ["rack"]) == "done"
        assert seen == [("app", {"a": 1}, ("rack",))]

    def test_command_options_never_redefine_globals(self) -> None:
        global_flags = {flag for spec in GLOBAL_OPTIONS for flag in spec.flags()}
        for name, specs in OPTION_SCHEMAS.items():
            flags = {flag for spec in specs for flag in spec.flags()}
            assert not flags & global_flags, name

    def test_install_flags_parse(self) -> None:
        command = _echo_params(*OPTION_SCHEMAS["install"])
        runner = CliRunner()
        output = runner.invoke(command, ["-j", "4", "-P", "HighSecurity", "--frozen"]).output
        assert "('jobs', 4)" in output
        assert "('trust_policy', 'HighSecurity')" in output
        assert "('frozen', True)" in output
        assert "('standalone', None)" in output

    def test_standalone_lazy_default(self) -> None:
        command = _echo_params(*OPTION_SCHEMAS["install"])
        runner = CliRunner()
        assert "('standalone', [])" in runner.invoke(command, ["--standalone"]).output
        assert "('standalone', ['web', 'test'])" in runner.invoke(
            command, ["--standalone", "web,test"]
        ).output
