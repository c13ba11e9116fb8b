"""Command table and registry construction for gemctl.

Every built-in command is one :class:`CommandDescriptor` in
:data:`COMMAND_TABLE`.  Handlers are referenced as ``"module:function"``
strings so a command module is only imported when that command runs.
"""

from __future__ import annotations

from gemctl.commands._options import OPTION_SCHEMAS
from gemctl.commands._registry import CommandRegistry
from gemctl.commands._schema import ArgumentSpec, CommandDescriptor

DEFAULT_COMMAND = "install"

_GEMS = ArgumentSpec("gems", required=False, variadic=True)

COMMAND_TABLE: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        "init",
        "gemctl.commands.init_cmd:init",
        help="Generates a Gemfile into the current working directory.",
    ),
    CommandDescriptor(
        "check",
        "gemctl.commands.check:check",
        help="Checks if the dependencies listed in Gemfile are satisfied by installed gems.",
        options=OPTION_SCHEMAS["check"],
        aliases=frozenset({"c"}),
    ),
    CommandDescriptor(
        "install",
        "gemctl.commands.install:install",
        help="Install the current environment to the system.",
        options=OPTION_SCHEMAS["install"],
        aliases=frozenset({"i"}),
        examples="""\
  gemctl install
  gemctl install --without development test
  gemctl install --path vendor/bundle --binstubs""",
    ),
    CommandDescriptor(
        "update",
        "gemctl.commands.update:update",
        help="Reinstall gems from the gem cache.",
        options=OPTION_SCHEMAS["update"],
        arguments=(_GEMS,),
    ),
    CommandDescriptor(
        "show",
        "gemctl.commands.show:show",
        help="Shows all gems that are part of the bundle, or the path to a given gem.",
        options=OPTION_SCHEMAS["show"],
        arguments=(ArgumentSpec("gem", required=False),),
        aliases=frozenset({"list"}),
    ),
    CommandDescriptor(
        "binstubs",
        "gemctl.commands.binstubs:binstubs",
        help="Install the binstubs of the listed gems.",
        options=OPTION_SCHEMAS["binstubs"],
        arguments=(_GEMS,),
    ),
    CommandDescriptor(
        "outdated",
        "gemctl.commands.outdated:outdated",
        help="List installed gems with newer versions available in the gem cache.",
        options=OPTION_SCHEMAS["outdated"],
        arguments=(_GEMS,),
    ),
    CommandDescriptor(
        "exec",
        "gemctl.commands.exec_cmd:exec_command",
        help="Run the command in context of the bundle.",
        options=OPTION_SCHEMAS["exec"],
        arguments=(ArgumentSpec("command", required=False, variadic=True),),
        aliases=frozenset({"e", "ex", "exe"}),
        passthrough=True,
        examples="""\
  gemctl exec rake test
  gemctl exec -- rspec --help""",
    ),
    CommandDescriptor(
        "config",
        "gemctl.commands.config_cmd:config",
        help="Retrieve configuration values.",
        arguments=(ArgumentSpec("name", required=False),),
    ),
    CommandDescriptor(
        "open",
        "gemctl.commands.open_cmd:open_gem",
        help="Opens the source directory of the given bundled gem.",
        arguments=(ArgumentSpec("gem"),),
    ),
    CommandDescriptor(
        "console",
        "gemctl.commands.console:console",
        help="Opens an interactive session with the bundle pre-loaded.",
        arguments=(ArgumentSpec("group", required=False),),
    ),
    CommandDescriptor(
        "version",
        "gemctl.commands.version:version",
        help="Prints gemctl's version information.",
    ),
    CommandDescriptor(
        "licenses",
        "gemctl.commands.show:licenses",
        help="Prints the license of all gems in the bundle.",
    ),
    CommandDescriptor(
        "clean",
        "gemctl.commands.clean:clean",
        help="Cleans up unused gems in your install path.",
        options=OPTION_SCHEMAS["clean"],
    ),
    CommandDescriptor(
        "env",
        "gemctl.commands.env_cmd:env",
        help="Print information about the environment gemctl is running under.",
    ),
    CommandDescriptor(
        "add",
        "gemctl.commands.add:add",
        help="Add the named gem to the bottom of Gemfile.",
        arguments=(ArgumentSpec("gem"), ArgumentSpec("version", required=False)),
    ),
    CommandDescriptor(
        "remove",
        "gemctl.commands.remove:remove",
        help="Removes gems from the Gemfile.",
        options=OPTION_SCHEMAS["remove"],
        arguments=(_GEMS,),
        examples="""\
  gemctl remove rack
  gemctl remove rack rspec --install""",
    ),
    CommandDescriptor(
        "help",
        "gemctl.commands.help_cmd:help_command",
        help="Describe available commands or one specific command.",
        arguments=(ArgumentSpec("command", required=False),),
    ),
    CommandDescriptor(
        "plugin",
        "gemctl.commands.plugin_cmd:plugin",
        help="List loaded plugins and the commands they provide.",
        hidden=True,
    ),
)


def build_registry() -> CommandRegistry:
    """Build the registry of built-in commands."""
    return CommandRegistry(COMMAND_TABLE)
