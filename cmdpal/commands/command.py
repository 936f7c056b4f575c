"""Command descriptor shared by every part of the palette."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cmdpal.exceptions import InvalidCommandError

from .types import CommandType

if TYPE_CHECKING:
    from cmdpal.config.user_prefs import UserPreferences


@dataclass(frozen=True)
class Command:
    """A single invokable, named action exposed to the palette.

    Commands are immutable for the lifetime of a registry; reloading builds
    new ones. Everything else refers to a command by ``id``.

    Hidden state is not a field: the user hides commands by id in
    ``UserPreferences.hidden_commands``, so it survives reloads. Use
    ``is_hidden`` to read it for a given preferences object.
    """

    id: str  # Unique and stable across reloads, e.g. "tool_cropTool"
    name: str  # Display text and query target
    type: CommandType
    enabled: bool = True
    description: str = ""  # Secondary text, e.g. the menu path
    shortcut: str = ""  # Keyboard shortcut hint

    def __post_init__(self) -> None:
        if not self.id or not self.name or not self.type:
            raise InvalidCommandError(
                "Command requires a valid ID, name, and type",
                command_id=self.id,
                name=self.name,
            )
        if not isinstance(self.type, CommandType):
            parsed = CommandType.parse(str(self.type))
            if parsed is None:
                raise InvalidCommandError("Unknown command type", type=self.type)
            object.__setattr__(self, "type", parsed)

    def is_hidden(self, prefs: "UserPreferences") -> bool:
        """Whether the user has hidden this command."""
        return prefs.is_hidden(self.id)
