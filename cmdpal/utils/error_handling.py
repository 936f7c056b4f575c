"""Error handling decorator for CLI commands."""

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

import typer
from rich.console import Console

from cmdpal.exceptions import CmdpalError, CommandNotFoundError, ConfigurationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_error(
    operation: str,
    console: Optional[Console] = None,
    exit_code: int = 1,
    log_traceback: bool = True,
) -> Callable[[F], F]:
    """Decorator for consistent CLI command error handling.

    Args:
        operation: Description of the operation for error messages
        console: Rich Console instance for output (creates one if not provided)
        exit_code: Exit code to use on error (default: 1)
        log_traceback: Whether to log the full traceback (default: True)

    Usage:
        @app.command()
        @handle_cli_error("recording selection")
        def select(command_id: str):
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _console = console or Console()
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except typer.Abort:
                _console.print(f"[yellow]{operation.capitalize()} cancelled[/yellow]")
                raise typer.Exit(0) from None
            except CommandNotFoundError as e:
                _console.print(f"[red]Error: {e.message}: {e.context.get('command_id', '')}[/red]")
                raise typer.Exit(exit_code) from e
            except ConfigurationError as e:
                _console.print(f"[red]Configuration error: {e}[/red]")
                raise typer.Exit(exit_code) from e
            except CmdpalError as e:
                _console.print(f"[red]Error {operation}: {e.message}[/red]")
                if log_traceback:
                    logger.error(f"Error during {operation}: {e}", exc_info=True)
                raise typer.Exit(exit_code) from e
            except Exception as e:
                _console.print(f"[red]Error {operation}: {e}[/red]")
                if log_traceback:
                    logger.error(f"Unexpected error during {operation}: {e}", exc_info=True)
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
