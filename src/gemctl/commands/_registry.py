"""CommandRegistry — name/alias lookup over CommandDescriptors.

Built once per process from the static table in :mod:`gemctl.commands`.
Names and aliases share one namespace; collisions are rejected.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gemctl.commands._schema import CommandDescriptor


class CommandRegistry:
    """Injective mapping from command names and aliases to descriptors."""

    def __init__(self, descriptors: Iterable[CommandDescriptor] = ()) -> None:
        self._commands: dict[str, CommandDescriptor] = {}
        self._index: dict[str, str] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: CommandDescriptor) -> None:
        """Add *descriptor*.

        Raises:
            ValueError: If its name or any alias is already taken (or an
                alias repeats its own name).
        """
        keys = [descriptor.name, *sorted(descriptor.aliases)]
        taken = sorted(k for k in keys if k in self._index)
        if taken or len(set(keys)) != len(keys):
            clashes = ", ".join(repr(k) for k in taken) or repr(descriptor.name)
            msg = f"Cannot register command {descriptor.name!r}: {clashes} already registered"
            raise ValueError(msg)
        self._commands[descriptor.name] = descriptor
        for key in keys:
            self._index[key] = descriptor.name

    def lookup(self, name: str) -> CommandDescriptor | None:
        """Return the descriptor registered under *name* (or alias), if any."""
        canonical = self._index.get(name)
        return self._commands[canonical] if canonical is not None else None

    def __getitem__(self, name: str) -> CommandDescriptor:
        descriptor = self.lookup(name)
        if descriptor is None:
            raise KeyError(name)
        return descriptor

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> set[str]:
        """All dispatchable tokens: canonical names and aliases."""
        return set(self._index)

    def visible(self) -> list[CommandDescriptor]:
        """Non-hidden descriptors, sorted by name."""
        return sorted((d for d in self._commands.values() if not d.hidden), key=lambda d: d.name)
