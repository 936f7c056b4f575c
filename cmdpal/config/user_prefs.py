"""
cmdpal user preferences.

Handles persistence of the user-managed lists the palette reads: hidden
commands, startup commands, bookmarks, scripts and disabled command types.
Stored in ~/.config/cmdpal/user.json (or $CMDPAL_DATA_DIR/user.json).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmdpal.exceptions import PreferencesError
from cmdpal.utils.json_files import atomic_write_json, backup_file, read_json

from .constants import DEFAULT_STARTUP_COMMANDS
from .settings import get_user_path

logger = logging.getLogger(__name__)

LIST_FIELDS = (
    "bookmarks",
    "scripts",
    "hidden_commands",
    "startup_commands",
    "disabled_command_types",
)

# On-disk keys are camelCase
_DISK_KEYS = {
    "bookmarks": "bookmarks",
    "scripts": "scripts",
    "hidden_commands": "hiddenCommands",
    "startup_commands": "startupCommands",
    "disabled_command_types": "disabledCommandTypes",
}

# Bookmarks and scripts are objects, the rest are command ids or type names
_ITEM_TYPES = {
    "bookmarks": dict,
    "scripts": dict,
    "hidden_commands": str,
    "startup_commands": str,
    "disabled_command_types": str,
}


@dataclass
class UserPreferences:
    """User-managed command lists."""

    bookmarks: list[dict[str, Any]] = field(default_factory=list)
    scripts: list[dict[str, Any]] = field(default_factory=list)
    hidden_commands: list[str] = field(default_factory=list)
    startup_commands: list[str] = field(default_factory=lambda: list(DEFAULT_STARTUP_COMMANDS))
    disabled_command_types: list[str] = field(default_factory=list)

    def is_hidden(self, command_id: str) -> bool:
        return command_id in self.hidden_commands

    def hide(self, command_id: str) -> bool:
        """Hide a command. Returns False if it was already hidden."""
        if command_id in self.hidden_commands:
            return False
        self.hidden_commands.append(command_id)
        return True

    def unhide(self, command_id: str) -> bool:
        """Unhide a command. Returns False if it was not hidden."""
        if command_id not in self.hidden_commands:
            return False
        self.hidden_commands.remove(command_id)
        return True

    def add_startup(self, command_id: str) -> bool:
        if command_id in self.startup_commands:
            return False
        self.startup_commands.append(command_id)
        return True

    def remove_startup(self, command_id: str) -> bool:
        if command_id not in self.startup_commands:
            return False
        self.startup_commands.remove(command_id)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {_DISK_KEYS[name]: list(getattr(self, name)) for name in LIST_FIELDS}

    @classmethod
    def from_dict(cls, data: Any) -> tuple[UserPreferences, bool]:
        """Build preferences from parsed JSON, repairing what it can.

        Returns:
            Tuple of (preferences, was_valid). ``was_valid`` is False when a
            key was missing or had the wrong type and a default was used, or
            when entries of the wrong type were dropped from a list.
        """
        if not isinstance(data, dict):
            return cls(), False

        prefs = cls()
        valid = True
        for name in LIST_FIELDS:
            value = data.get(_DISK_KEYS[name])
            if not isinstance(value, list):
                valid = False
                continue
            item_type = _ITEM_TYPES[name]
            items = [item for item in value if isinstance(item, item_type)]
            if len(items) != len(value):
                logger.warning(f"Dropped {len(value) - len(items)} invalid {_DISK_KEYS[name]} entries")
                valid = False
            setattr(prefs, name, items)
        return prefs, valid


class PreferencesStore:
    """Load and save ``UserPreferences`` as a JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_user_path()

    def load(self) -> tuple[UserPreferences, str | None]:
        """Load preferences from disk.

        Never raises: a missing file yields defaults, a corrupt file is
        backed up and replaced by defaults.

        Returns:
            Tuple of (preferences, notice). ``notice`` is a message for the
            user when the file had to be backed up or repaired.
        """
        try:
            data = read_json(self.path)
        except FileNotFoundError:
            logger.debug("User data file not found, using defaults")
            return UserPreferences(), None
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.error(f"User data file unreadable: {e}")
            return UserPreferences(), self._backup_notice()

        prefs, valid = UserPreferences.from_dict(data)
        if not valid:
            logger.warning("User data validation failed, saving corrected version")
            try:
                self.save(prefs)
            except PreferencesError as e:
                logger.warning(f"Could not save corrected user data: {e}")
        return prefs, None

    def save(self, prefs: UserPreferences) -> None:
        """Write preferences atomically.

        Raises:
            PreferencesError: If the file cannot be written
        """
        try:
            atomic_write_json(self.path, prefs.to_dict())
        except OSError as e:
            raise PreferencesError("Failed to write user data", path=str(self.path)) from e
        logger.debug(f"User data written to {self.path}")

    def _backup_notice(self) -> str | None:
        try:
            backup = backup_file(self.path)
        except OSError as e:
            logger.error(f"Failed to back up user data: {e}")
            return None
        if backup is None:
            return None
        return (
            "There was an error reading your user data file so a backup was "
            f"created at {backup}."
        )
