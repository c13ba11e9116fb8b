"""Click integration: commands built from descriptors, and the root group.

Provides GemCommand (with ``--examples`` support and usage errors mapped to
InvalidOptionError), PassthroughCommand for plugin and external programs,
and GemGroup, whose ``resolve_command`` is the single dispatch site for
:class:`~gemctl.commands._dispatch.Resolution` values.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import click

from gemctl.commands._context import RAW_ARGS_META_KEY, ensure_app_context
from gemctl.commands._dispatch import External, Internal, Plugin
from gemctl.commands._guard import auto_install
from gemctl.commands._options import GLOBAL_OPTIONS
from gemctl.errors import InvalidOptionError, UnknownCommandError
from gemctl.infrastructure.process import run_program

if TYPE_CHECKING:
    from gemctl.commands._registry import CommandRegistry
    from gemctl.commands._schema import CommandDescriptor


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


def invalid_option(exc: click.UsageError) -> InvalidOptionError:
    """Map a Click usage error to InvalidOptionError in gemctl's own wording."""
    if isinstance(exc, click.NoSuchOption):
        message = f"Unknown option: {exc.option_name}"
        if exc.possibilities:
            message += f" (did you mean {', '.join(sorted(exc.possibilities))}?)"
        return InvalidOptionError(message)
    return InvalidOptionError(exc.format_message())


class GemCommand(click.Command):
    """Click Command for a registered descriptor."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            raise invalid_option(exc) from exc


class PassthroughCommand(click.Command):
    """A command whose arguments are forwarded verbatim, never parsed."""

    def __init__(self, name: str, callback: Any, **kwargs: Any) -> None:
        super().__init__(name, callback=callback, add_help_option=False, **kwargs)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.params["args"] = tuple(args)
        return []


def _run_descriptor(descriptor: CommandDescriptor, **params: Any) -> Any:
    """Callback shared by every registered command."""
    ctx = click.get_current_context()
    app = ensure_app_context(ctx)
    app.apply_globals(**{spec.dest: params.pop(spec.dest, None) for spec in GLOBAL_OPTIONS})

    args: list[str] = []
    for argument in descriptor.arguments:
        value = params.pop(argument.dest, None)
        if argument.variadic:
            args.extend(value or ())
        elif value is not None:
            args.append(value)

    if params.get("gemfile"):
        app.use_gemfile(params["gemfile"])

    auto_install(app, descriptor.name)
    return descriptor.invoke(app, params, tuple(args))


def build_command(descriptor: CommandDescriptor) -> GemCommand:
    """Translate *descriptor* into a Click command."""
    params: list[click.Parameter] = [spec.to_click() for spec in descriptor.options]
    command_flags = {flag for spec in descriptor.options for flag in spec.flags()}
    for spec in GLOBAL_OPTIONS:
        clash = command_flags.intersection(spec.flags())
        if clash:
            msg = f"Command {descriptor.name!r} redefines global flag(s) {sorted(clash)}"
            raise ValueError(msg)
        params.append(spec.to_click())
    params.extend(arg.to_click() for arg in descriptor.arguments)

    context_settings: dict[str, Any] = {}
    if descriptor.passthrough:
        context_settings = {"ignore_unknown_options": True, "allow_interspersed_args": False}

    return GemCommand(
        descriptor.name,
        callback=functools.partial(_run_descriptor, descriptor),
        params=params,
        help=descriptor.help,
        short_help=descriptor.help.split("\n", 1)[0] if descriptor.help else None,
        hidden=descriptor.hidden,
        context_settings=context_settings,
        examples=descriptor.examples,
    )


def plugin_command(resolution: Plugin) -> PassthroughCommand:
    def run(args: tuple[str, ...]) -> None:
        raise SystemExit(resolution.manager.exec_command(resolution.name, args))

    return PassthroughCommand(resolution.name, run)


def external_command(resolution: External) -> PassthroughCommand:
    def run(args: tuple[str, ...]) -> None:
        raise SystemExit(run_program([resolution.ref.path, *args]))

    return PassthroughCommand(resolution.name, run)


class GemGroup(click.Group):
    """Root group backed by a CommandRegistry with dispatch fallbacks."""

    def __init__(self, *args: Any, registry: CommandRegistry, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.registry = registry
        self._built: dict[str, GemCommand] = {}
        self.params.extend(spec.to_click() for spec in GLOBAL_OPTIONS)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta[RAW_ARGS_META_KEY] = tuple(args)
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            raise invalid_option(exc) from exc

    def list_commands(self, ctx: click.Context) -> list[str]:
        return [descriptor.name for descriptor in self.registry.visible()]

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        descriptor = self.registry.lookup(cmd_name)
        if descriptor is None:
            return None
        if descriptor.name not in self._built:
            self._built[descriptor.name] = build_command(descriptor)
        return self._built[descriptor.name]

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        name, rest = args[0], args[1:]
        resolution = ensure_app_context(ctx).dispatcher().resolve(name)

        if isinstance(resolution, Internal):
            return resolution.descriptor.name, self.get_command(ctx, name), rest
        if isinstance(resolution, Plugin):
            return name, plugin_command(resolution), rest
        if isinstance(resolution, External):
            return name, external_command(resolution), rest
        if name.startswith("-"):
            raise InvalidOptionError(f"Unknown option: {name}")
        raise UnknownCommandError(name)
