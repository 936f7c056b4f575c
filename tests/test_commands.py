"""Tests for command records, the registry and executor dispatch."""

from unittest.mock import Mock

import pytest

from cmdpal.commands import Command, CommandRegistry, CommandType, ExecutorRegistry
from cmdpal.config.user_prefs import UserPreferences
from cmdpal.exceptions import CommandExecutionError, InvalidCommandError


class TestCommandType:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("tool", CommandType.TOOL),
            ("MENU", CommandType.MENU),
            (" builtin ", CommandType.BUILTIN),
            ("plugin", CommandType.BUILTIN),
            ("photoshop", CommandType.API),
            ("nope", None),
        ],
    )
    def test_parse(self, name, expected):
        assert CommandType.parse(name) is expected


class TestCommand:
    def test_string_type_coerced(self):
        command = Command(id="t", name="T", type="tool")
        assert command.type is CommandType.TOOL

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"id": "", "name": "N", "type": CommandType.TOOL},
            {"id": "i", "name": "", "type": CommandType.TOOL},
            {"id": "i", "name": "N", "type": None},
            {"id": "i", "name": "N", "type": "widget"},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidCommandError):
            Command(**kwargs)

    def test_immutable(self):
        command = Command(id="t", name="T", type=CommandType.TOOL)
        with pytest.raises(AttributeError):
            command.name = "Other"

    def test_hidden_state_read_from_prefs(self):
        command = Command(id="menu_new", name="New", type=CommandType.MENU)
        prefs = UserPreferences()

        assert not command.is_hidden(prefs)
        prefs.hide("menu_new")
        assert command.is_hidden(prefs)


class TestCommandRegistry:
    def test_lookup_and_order(self, registry, sample_commands):
        assert len(registry) == len(sample_commands)
        assert list(registry) == sample_commands
        assert "menu_new" in registry
        assert registry.get("menu_new").name == "New"
        assert registry.get("missing") is None

    def test_duplicates_skipped(self):
        first = Command(id="x", name="First", type=CommandType.TOOL)
        second = Command(id="x", name="Second", type=CommandType.TOOL)

        registry = CommandRegistry([first, second])

        assert len(registry) == 1
        assert registry.get("x") is first

    def test_filters(self, registry):
        assert [c.id for c in registry.by_type(CommandType.BUILTIN)] == ["builtin_about", "builtin_reload"]
        assert len(registry.by_types([CommandType.TOOL, CommandType.BUILTIN])) == 4
        assert [c.id for c in registry.by_ids(["menu_open", "tool_cropTool"])] == ["tool_cropTool", "menu_open"]
        assert [c.id for c in registry.disabled()] == ["menu_disabled"]
        assert len(registry.enabled()) == len(registry) - 1


class TestExecutorRegistry:
    def test_dispatch_by_type(self):
        executors = ExecutorRegistry()
        run_tool = Mock(return_value="done")
        executors.register(CommandType.TOOL, run_tool)
        command = Command(id="t", name="T", type=CommandType.TOOL)

        assert executors.supports(CommandType.TOOL)
        assert executors.execute(command) == "done"
        run_tool.assert_called_once_with(command)

    def test_unregistered_type(self):
        executors = ExecutorRegistry()
        with pytest.raises(CommandExecutionError) as exc_info:
            executors.execute(Command(id="m", name="M", type=CommandType.MENU))
        assert exc_info.value.context["command_id"] == "m"

    def test_disabled_command_not_run(self):
        executors = ExecutorRegistry()
        run = Mock()
        executors.register(CommandType.MENU, run)

        with pytest.raises(CommandExecutionError):
            executors.execute(Command(id="m", name="M", type=CommandType.MENU, enabled=False))
        run.assert_not_called()

    def test_executor_failure_wrapped(self):
        executors = ExecutorRegistry()
        executors.register(CommandType.TOOL, Mock(side_effect=ValueError("bad")))

        with pytest.raises(CommandExecutionError, match="bad"):
            executors.execute(Command(id="t", name="T", type=CommandType.TOOL))

    def test_unregister(self):
        executors = ExecutorRegistry()
        executors.register(CommandType.TOOL, Mock())

        assert executors.unregister(CommandType.TOOL)
        assert not executors.unregister(CommandType.TOOL)
        assert not executors.supports(CommandType.TOOL)
