"""Command and option descriptors, and their translation to Click.

Descriptors are plain data.  A command's handler is either a callable or a
``"module:function"`` reference resolved on first use, which keeps
``gemctl --help`` from importing every command module.
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

import click

if TYPE_CHECKING:
    from gemctl.commands._context import AppContext

OptionType = Literal["boolean", "string", "numeric", "array"]
Handler = Callable[["AppContext", Mapping[str, Any], Sequence[str]], Any]


class StringList(click.ParamType):
    """Array option value: ``"a b"``, ``"a,b"`` and ``"a:b"`` all give ``["a", "b"]``."""

    name = "list"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> list[str]:
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        return [part for part in re.split(r"[\s,:]+", str(value)) if part]


_CLICK_TYPES: dict[str, click.ParamType | type] = {
    "string": str,
    "numeric": int,
    "array": StringList(),
}


@dataclass(frozen=True)
class OptionSpec:
    """One recognised flag of a command.

    ``lazy_default`` is the value used when the flag is given with no value
    (``--binstubs`` alone means ``--binstubs bin``).
    """

    name: str
    type: OptionType = "boolean"
    default: Any = None
    lazy_default: Any = None
    aliases: tuple[str, ...] = ()
    help: str = ""
    metavar: str | None = None

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    def flags(self) -> tuple[str, ...]:
        return (f"--{self.name}", *self.aliases)

    def to_click(self) -> click.Option:
        decls = [self.dest, *self.flags()]
        if self.type == "boolean":
            return click.Option(decls, is_flag=True, default=bool(self.default), help=self.help)
        kwargs: dict[str, Any] = {
            "type": _CLICK_TYPES[self.type],
            "default": self.default,
            "help": self.help,
            "metavar": self.metavar,
        }
        if self.lazy_default is not None:
            kwargs["is_flag"] = False
            kwargs["flag_value"] = self.lazy_default
        return click.Option(decls, **kwargs)


@dataclass(frozen=True)
class ArgumentSpec:
    """A positional argument; ``variadic`` arguments take zero or more values."""

    name: str
    required: bool = True
    variadic: bool = False

    @property
    def dest(self) -> str:
        return self.name.lower().replace("-", "_")

    def to_click(self) -> click.Argument:
        return click.Argument(
            [self.dest],
            nargs=-1 if self.variadic else 1,
            required=self.required,
            metavar=self.name.upper() + ("..." if self.variadic else ""),
        )


@dataclass(frozen=True)
class CommandDescriptor:
    """Everything needed to parse, list, and run one command.

    Attributes:
        name: Canonical command name.
        handler: ``(app, options, args)`` callable or ``"module:function"``.
        aliases: Alternative spellings that dispatch to the same handler.
        hidden: Excluded from the help listing but still dispatchable.
        passthrough: Stop parsing at the first positional argument and keep
            unknown options as arguments (``exec``).
    """

    name: str
    handler: Handler | str
    help: str = ""
    options: tuple[OptionSpec, ...] = ()
    arguments: tuple[ArgumentSpec, ...] = ()
    aliases: frozenset[str] = field(default_factory=frozenset)
    hidden: bool = False
    passthrough: bool = False
    examples: str | None = None

    def __post_init__(self) -> None:
        seen: dict[str, str] = {}
        for spec in self.options:
            for flag in spec.flags():
                if flag in seen:
                    msg = (
                        f"Command {self.name!r}: flag {flag!r} of option {spec.name!r} "
                        f"is already used by option {seen[flag]!r}"
                    )
                    raise ValueError(msg)
                seen[flag] = spec.name

    def resolve_handler(self) -> Handler:
        if callable(self.handler):
            return self.handler
        module_name, _, attr = self.handler.partition(":")
        return getattr(importlib.import_module(module_name), attr)

    def default_options(self) -> dict[str, Any]:
        """Option values as if the command were run with no flags."""
        return {
            spec.dest: bool(spec.default) if spec.type == "boolean" else spec.default
            for spec in self.options
        }

    def invoke(self, app: AppContext, options: Mapping[str, Any], args: Sequence[str]) -> Any:
        return self.resolve_handler()(app, options, args)
