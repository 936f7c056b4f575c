"""Custom exception hierarchy for cmdpal.

Exception Hierarchy:
    CmdpalError (base)
    ├── HistoryError - interaction log persistence
    │   ├── HistoryLoadError
    │   └── HistoryWriteError
    ├── PreferencesError - user preference persistence
    ├── CommandError - command construction, lookup and dispatch
    │   ├── InvalidCommandError
    │   ├── CommandNotFoundError
    │   └── CommandExecutionError
    └── ConfigurationError - settings/configuration issues

Persistence code raises these; the palette presenter catches them at its
boundary so a broken data file never takes the palette down.

Usage:
    from cmdpal.exceptions import HistoryLoadError

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise HistoryLoadError("History file is corrupt", path=str(path)) from e
"""

from typing import Any, Optional


class CmdpalError(Exception):
    """Base exception for all cmdpal errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, paths)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# History Errors
# =============================================================================


class HistoryError(CmdpalError):
    """Base exception for interaction log persistence."""

    pass


class HistoryLoadError(HistoryError):
    """The persisted history could not be read or parsed."""

    def __init__(
        self,
        message: str = "Failed to load history",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class HistoryWriteError(HistoryError):
    """The history snapshot could not be written - usually retryable."""

    def __init__(
        self,
        message: str = "Failed to write history",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, retryable=True, **context)


# =============================================================================
# Preference Errors
# =============================================================================


class PreferencesError(CmdpalError):
    """User preference file could not be read or written."""

    def __init__(
        self,
        message: str = "User preferences error",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Command Errors
# =============================================================================


class CommandError(CmdpalError):
    """Base exception for command errors."""

    pass


class InvalidCommandError(CommandError):
    """A command descriptor is missing a required field."""

    pass


class CommandNotFoundError(CommandError):
    """No command with the given id is registered."""

    def __init__(
        self,
        message: str = "Command not found",
        *,
        command_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id:
            context["command_id"] = command_id
        super().__init__(message, **context)


class CommandExecutionError(CommandError):
    """Dispatching a command to its executor failed."""

    def __init__(
        self,
        message: str = "Command execution failed",
        *,
        command_id: Optional[str] = None,
        command_type: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id:
            context["command_id"] = command_id
        if command_type:
            context["command_type"] = command_type
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CmdpalError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
