"""
Command registry for the palette.

Holds the point-in-time command set for one session. The registry is never
mutated after construction; a reload builds a new registry.
"""

import logging
from collections.abc import Iterable, Iterator

from .command import Command
from .types import CommandType

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Immutable, ordered collection of commands keyed by id."""

    def __init__(self, commands: Iterable[Command] = ()):
        ordered: list[Command] = []
        by_id: dict[str, Command] = {}
        for command in commands:
            if command.id in by_id:
                logger.warning(f"Duplicate command id skipped: {command.id}")
                continue
            by_id[command.id] = command
            ordered.append(command)
        self._commands = tuple(ordered)
        self._by_id = by_id
        logger.debug(f"Registry built with {len(self._commands)} commands")

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._by_id

    @property
    def commands(self) -> list[Command]:
        """All commands in registration order."""
        return list(self._commands)

    def get(self, command_id: str) -> Command | None:
        """Get a command by ID."""
        return self._by_id.get(command_id)

    def by_type(self, command_type: CommandType) -> list[Command]:
        return [c for c in self._commands if c.type == command_type]

    def by_types(self, types: Iterable[CommandType]) -> list[Command]:
        """Commands whose type is in ``types``, in registration order."""
        wanted = set(types)
        return [c for c in self._commands if c.type in wanted]

    def by_ids(self, ids: Iterable[str]) -> list[Command]:
        """Commands whose id is in ``ids``, in registration order."""
        wanted = set(ids)
        return [c for c in self._commands if c.id in wanted]

    def enabled(self) -> list[Command]:
        return [c for c in self._commands if c.enabled]

    def disabled(self) -> list[Command]:
        return [c for c in self._commands if not c.enabled]
