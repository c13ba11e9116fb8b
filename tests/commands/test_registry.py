"""Tests for CommandRegistry and the built-in command table."""

from __future__ import annotations

import pytest

from gemctl.commands import COMMAND_TABLE, build_registry
from gemctl.commands._registry import CommandRegistry
from gemctl.commands._schema import CommandDescriptor


def _noop(app: object, options: object, args: object) -> None:
    return None


class TestCommandRegistry:
    def test_lookup_by_name_and_alias(self) -> None:
        registry = CommandRegistry([CommandDescriptor("check", _noop, aliases=frozenset({"c"}))])
        assert registry.lookup("check") is registry.lookup("c")
        assert registry.lookup("x") is None
        assert "c" in registry
        assert len(registry) == 1

    def test_getitem_missing(self) -> None:
        with pytest.raises(KeyError):
            CommandRegistry()["install"]

    def test_name_collision(self) -> None:
        registry = CommandRegistry([CommandDescriptor("install", _noop)])
        with pytest.raises(ValueError, match="'install' already registered"):
            registry.register(CommandDescriptor("install", _noop))

    def test_alias_collides_with_name(self) -> None:
        registry = CommandRegistry([CommandDescriptor("install", _noop)])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(CommandDescriptor("setup", _noop, aliases=frozenset({"install"})))

    def test_alias_repeats_own_name(self) -> None:
        with pytest.raises(ValueError):
            CommandRegistry([CommandDescriptor("show", _noop, aliases=frozenset({"show"}))])

    def test_visible_excludes_hidden(self) -> None:
        registry = CommandRegistry(
            [
                CommandDescriptor("zeta", _noop),
                CommandDescriptor("alpha", _noop),
                CommandDescriptor("secret", _noop, hidden=True),
            ]
        )
        assert [d.name for d in registry.visible()] == ["alpha", "zeta"]
        assert "secret" in registry


class TestBuiltinTable:
    def test_registry_builds(self) -> None:
        registry = build_registry()
        assert len(registry) == len(COMMAND_TABLE)

    @pytest.mark.parametrize(
        ("token", "name"),
        [("i", "install"), ("c", "check"), ("list", "show"), ("e", "exec"), ("exe", "exec")],
    )
    def test_aliases(self, token: str, name: str) -> None:
        assert build_registry()[token].name == name

    def test_handlers_resolve(self) -> None:
        for descriptor in COMMAND_TABLE:
            assert callable(descriptor.resolve_handler()), descriptor.name

    def test_plugin_command_hidden(self) -> None:
        names = [d.name for d in build_registry().visible()]
        assert "plugin" not in names
        assert "install" in names
