"""Command type tags."""

from __future__ import annotations

from enum import Enum


class CommandType(str, Enum):
    """Kinds of commands the palette aggregates."""

    MENU = "menu"
    TOOL = "tool"
    ACTION = "action"
    SCRIPT = "script"
    BOOKMARK = "bookmark"
    BUILTIN = "builtin"
    PICKER = "picker"
    API = "api"

    @classmethod
    def parse(cls, name: str) -> CommandType | None:
        """Look up a type by name, case-insensitively. Unknown names give None."""
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_ALIASES = {
    "plugin": CommandType.BUILTIN.value,
    "photoshop": CommandType.API.value,
}


class BookmarkType(str, Enum):
    """Targets a bookmark command can point at."""

    FILE = "file"
    FOLDER = "folder"
