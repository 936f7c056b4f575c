"""Shared pytest fixtures for cmdpal tests."""

import pytest

from cmdpal.commands import Command, CommandRegistry, CommandType
from cmdpal.config.user_prefs import PreferencesStore, UserPreferences
from cmdpal.core.history import HistoryStore, InteractionLog


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point every history and preference file at a temp directory."""
    data_dir = tmp_path / "cmdpal-data"
    monkeypatch.setenv("CMDPAL_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def history_store(isolated_data_dir):
    return HistoryStore()


@pytest.fixture
def prefs_store(isolated_data_dir):
    return PreferencesStore()


@pytest.fixture
def sample_commands():
    """A small mixed command set in registration order."""
    return [
        Command(id="tool_cropTool", name="Crop Tool", type=CommandType.TOOL, shortcut="C"),
        Command(id="menu_crop", name="Crop", type=CommandType.MENU, description="Image"),
        Command(
            id="tool_colorReplacementBrushTool",
            name="Color Replacement",
            type=CommandType.TOOL,
        ),
        Command(id="menu_new", name="New", type=CommandType.MENU, description="File"),
        Command(id="menu_open", name="Open", type=CommandType.MENU, description="File"),
        Command(id="builtin_about", name="About Command Palette", type=CommandType.BUILTIN),
        Command(id="builtin_reload", name="Reload Plugin Data", type=CommandType.BUILTIN),
        Command(
            id="menu_disabled",
            name="Disabled Item",
            type=CommandType.MENU,
            enabled=False,
        ),
    ]


@pytest.fixture
def registry(sample_commands):
    return CommandRegistry(sample_commands)


@pytest.fixture
def no_startup_prefs():
    """Preferences with no startup commands so the startup view shows everything."""
    return UserPreferences(startup_commands=[])


@pytest.fixture
def make_log():
    """Factory building a log from (query, command_id) pairs given oldest first."""

    def _make(*picks):
        log = InteractionLog()
        for timestamp, (query_text, command_id) in enumerate(picks, 1):
            log.add(query_text, command_id, timestamp=timestamp)
        return log

    return _make
