"""
Dispatch table mapping command types to execute callables.

The ranking and query code never touches execution; the host registers one
handler per command type and the palette hands the selected command over.
"""

import logging
from collections.abc import Callable
from typing import Any

from cmdpal.exceptions import CommandExecutionError

from .command import Command
from .types import CommandType

logger = logging.getLogger(__name__)

Executor = Callable[[Command], Any]


class ExecutorRegistry:
    """Registry of per-type executors."""

    def __init__(self):
        self._executors: dict[CommandType, Executor] = {}

    def register(self, command_type: CommandType, executor: Executor) -> None:
        """Register (or replace) the executor for a command type."""
        self._executors[command_type] = executor
        logger.debug(f"Registered executor for {command_type.value} commands")

    def unregister(self, command_type: CommandType) -> bool:
        """Unregister an executor. Returns True if found."""
        return self._executors.pop(command_type, None) is not None

    def supports(self, command_type: CommandType) -> bool:
        return command_type in self._executors

    def execute(self, command: Command) -> Any:
        """Run the executor registered for the command's type.

        Raises:
            CommandExecutionError: If no executor is registered, the command is
                disabled, or the executor itself fails
        """
        executor = self._executors.get(command.type)
        if executor is None:
            raise CommandExecutionError(
                "No executor registered",
                command_id=command.id,
                command_type=command.type.value,
            )
        if not command.enabled:
            raise CommandExecutionError(
                "Command is disabled",
                command_id=command.id,
                command_type=command.type.value,
            )

        logger.debug(f"Executing {command.id}")
        try:
            return executor(command)
        except CommandExecutionError:
            raise
        except Exception as e:
            raise CommandExecutionError(
                f"Executor failed: {e}",
                command_id=command.id,
                command_type=command.type.value,
            ) from e
