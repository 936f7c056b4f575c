"""
Command model for the palette.

Provides:
- Command: immutable command descriptor
- CommandType: command kind tag
- CommandRegistry: point-in-time command set
- ExecutorRegistry: per-type execution dispatch
- load_commands: build a registry from every command source
"""

from .command import Command
from .executor import ExecutorRegistry
from .loaders import load_commands
from .registry import CommandRegistry
from .types import BookmarkType, CommandType

__all__ = [
    "BookmarkType",
    "Command",
    "CommandRegistry",
    "CommandType",
    "ExecutorRegistry",
    "load_commands",
]
