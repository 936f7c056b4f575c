"""
Command loaders.

Each loader turns one source (the host menu bar, action sets, the static
tool list, builtins, user bookmarks and scripts) into ``Command`` records.
``load_commands`` runs them all and concatenates the results into a fresh
registry.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from cmdpal.config.user_prefs import UserPreferences
from cmdpal.exceptions import InvalidCommandError

from .catalog import BUILTINS, MENU_SHORTCUT_PATCHES, MENUS_TO_IGNORE, TOOLS
from .command import Command
from .registry import CommandRegistry
from .types import BookmarkType, CommandType

logger = logging.getLogger(__name__)

_MODIFIERS = (
    ("shiftKey", "⇧"),
    ("controlKey", "⌃"),
    ("optionKey", "⌥"),
    ("commandKey", "⌘"),
)


def clean_title(title: str) -> str:
    """Remove the ``&`` mnemonic markers host menus put in their titles."""
    title = re.sub(r"(\S)&", r"\1", title)
    title = re.sub(r"&(\S)", r"\1", title)
    return title.strip()


def format_shortcut(shortcut: dict[str, Any] | None) -> str:
    """Render a host shortcut object as e.g. ``⇧⌘N``."""
    if not shortcut or not shortcut.get("keyChar"):
        return ""
    modifiers = [symbol for key, symbol in _MODIFIERS if shortcut.get(key)]
    return "".join(modifiers) + str(shortcut["keyChar"])


# =============================================================================
# Loaders
# =============================================================================


def load_menus(menu_bar: dict[str, Any] | None) -> list[Command]:
    """Flatten a host menu bar tree into menu commands.

    The tree is walked with an explicit stack so deeply nested menus never
    hit the recursion limit. Items come out in menu order and carry their
    menu path as the description.
    """
    if not menu_bar or not menu_bar.get("submenu"):
        logger.warning("No menu items found")
        return []

    results: list[Command] = []
    stack: list[tuple[dict[str, Any], list[str]]] = [(menu_bar, [])]

    while stack:
        node, path = stack.pop()

        children = node.get("submenu")
        if isinstance(children, list):
            # Push in reverse so the first child is visited first
            for child in reversed(children):
                if not isinstance(child, dict):
                    continue
                title = clean_title(str(child.get("title", "")))
                if title in MENUS_TO_IGNORE:
                    continue
                stack.append((child, [*path, title]))

        if node.get("kind") == "item":
            command = _menu_command(node, path)
            if command is not None:
                results.append(command)

    logger.debug(f"Loaded {len(results)} menu commands")
    return results


def _menu_command(node: dict[str, Any], path: list[str]) -> Command | None:
    command_id = node.get("command")
    if command_id is None:
        return None

    name = node.get("name") or ""
    if not name:
        name = clean_title(re.sub(r"\.\.\.$", "", str(node.get("title", ""))))
    shortcut = MENU_SHORTCUT_PATCHES.get(command_id) or node.get("menuShortcut")

    try:
        return Command(
            id=f"menu_{command_id}",
            name=name,
            type=CommandType.MENU,
            enabled=bool(node.get("enabled", True)),
            # The last path element is the item itself
            description=" > ".join(path[:-1]),
            shortcut=format_shortcut(shortcut),
        )
    except InvalidCommandError as e:
        logger.warning(f"Skipping menu item: {e}")
        return None


def load_actions(action_tree: Iterable[dict[str, Any]] | None) -> list[Command]:
    """Build action commands from host action sets."""
    actions: list[Command] = []
    for action_set in action_tree or []:
        set_name = action_set.get("name", "")
        for action in action_set.get("actions", []):
            try:
                actions.append(
                    Command(
                        id=f"action_{set_name}_{action.get('name')}_{action.get('id')}",
                        name=action.get("name", ""),
                        type=CommandType.ACTION,
                        description=f"Action Set: {set_name}",
                    )
                )
            except InvalidCommandError as e:
                logger.warning(f"Skipping action: {e}")
    return actions


def load_tools() -> list[Command]:
    """Build tool commands from the static tool catalog."""
    return [
        Command(
            id=f"tool_{ref}",
            name=name,
            type=CommandType.TOOL,
            description=description,
            shortcut=shortcut,
        )
        for ref, name, description, shortcut in TOOLS
    ]


def load_builtins() -> list[Command]:
    """Build the palette's own commands."""
    return [
        Command(id=f"builtin_{key}", name=name, type=CommandType.BUILTIN, description=note)
        for key, (name, note) in BUILTINS.items()
    ]


def load_bookmarks(prefs: UserPreferences) -> list[Command]:
    """Build bookmark commands from the user's saved file and folder bookmarks."""
    bookmarks: list[Command] = []
    for entry in prefs.bookmarks:
        path = str(entry.get("path", ""))
        kind = entry.get("type", BookmarkType.FILE.value)
        if kind not in {t.value for t in BookmarkType}:
            logger.warning(f"Skipping bookmark with unknown type {kind!r}: {path}")
            continue
        try:
            bookmarks.append(
                Command(
                    id=entry.get("id") or f"bookmark_{path}",
                    name=entry.get("name", ""),
                    type=CommandType.BOOKMARK,
                    description=path,
                )
            )
        except InvalidCommandError as e:
            logger.warning(f"Skipping bookmark: {e}")
    return bookmarks


def load_scripts(prefs: UserPreferences) -> list[Command]:
    """Build script commands from the user's loaded scripts."""
    scripts: list[Command] = []
    for entry in prefs.scripts:
        path = str(entry.get("path", ""))
        try:
            scripts.append(
                Command(
                    id=entry.get("id") or f"script_{path}",
                    name=entry.get("name", ""),
                    type=CommandType.SCRIPT,
                    description=path,
                )
            )
        except InvalidCommandError as e:
            logger.warning(f"Skipping script: {e}")
    return scripts


def load_commands(
    prefs: UserPreferences | None = None,
    *,
    menu_bar: dict[str, Any] | None = None,
    action_tree: Iterable[dict[str, Any]] | None = None,
    excluded_types: Iterable[CommandType] = (),
) -> CommandRegistry:
    """Run every loader whose type is not excluded and build a registry.

    Types listed in ``prefs.disabled_command_types`` are excluded as well. A
    loader that fails is logged and skipped so one bad source never empties
    the palette.
    """
    prefs = prefs or UserPreferences()
    excluded = set(excluded_types)
    for name in prefs.disabled_command_types:
        parsed = CommandType.parse(name)
        if parsed is not None:
            excluded.add(parsed)

    loaders: dict[CommandType, Callable[[], list[Command]]] = {
        CommandType.MENU: lambda: load_menus(menu_bar) if menu_bar else [],
        CommandType.TOOL: load_tools,
        CommandType.ACTION: lambda: load_actions(action_tree),
        CommandType.SCRIPT: lambda: load_scripts(prefs),
        CommandType.BOOKMARK: lambda: load_bookmarks(prefs),
        CommandType.BUILTIN: load_builtins,
    }

    commands: list[Command] = []
    for command_type, loader in loaders.items():
        if command_type in excluded:
            logger.debug(f"Skipping {command_type.value} commands")
            continue
        try:
            loaded = loader()
        except Exception as e:
            logger.error(f"Error loading {command_type.value} commands: {e}")
            continue
        logger.debug(f"Loaded {len(loaded)} {command_type.value} commands")
        commands.extend(loaded)

    return CommandRegistry(commands)
