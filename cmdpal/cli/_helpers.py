"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer

from cmdpal.commands.loaders import load_commands
from cmdpal.commands.registry import CommandRegistry
from cmdpal.commands.types import CommandType
from cmdpal.config.user_prefs import PreferencesStore, UserPreferences
from cmdpal.exceptions import ConfigurationError
from cmdpal.palette.presenter import PalettePresenter
from cmdpal.utils.output import console


@dataclass
class CliOptions:
    """Global options captured by the root callback."""

    menus: Optional[Path] = None
    actions: Optional[Path] = None


def get_options(ctx: typer.Context) -> CliOptions:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, CliOptions) else CliOptions()


def _read_source(path: Optional[Path], setting: str) -> Any:
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read {path}: {e}", setting=setting) from e


def build_presenter(ctx: typer.Context) -> PalettePresenter:
    """Load preferences, commands and history for a CLI invocation."""
    options = get_options(ctx)
    menu_bar = _read_source(options.menus, "menus")
    action_tree = _read_source(options.actions, "actions")

    def registry_factory(prefs: UserPreferences) -> CommandRegistry:
        return load_commands(prefs, menu_bar=menu_bar, action_tree=action_tree)

    presenter = PalettePresenter.from_data_dir(registry_factory)
    notice = presenter.pop_notice()
    if notice:
        console.print(f"[yellow]{notice}[/yellow]")
    return presenter


def load_prefs() -> tuple[PreferencesStore, UserPreferences]:
    store = PreferencesStore()
    prefs, notice = store.load()
    if notice:
        console.print(f"[yellow]{notice}[/yellow]")
    return store, prefs


def parse_types(names: Optional[list[str]]) -> Optional[list[CommandType]]:
    """Convert --type values to CommandTypes, rejecting unknown names."""
    if not names:
        return None
    types = []
    for name in names:
        parsed = CommandType.parse(name)
        if parsed is None:
            valid = ", ".join(t.value for t in CommandType)
            raise typer.BadParameter(f"Unknown command type '{name}'. Valid types: {valid}")
        types.append(parsed)
    return types
