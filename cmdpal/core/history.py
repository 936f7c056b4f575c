"""
Interaction log: the user's past palette selections.

Events are kept most-recent-first (index 0 is always the newest). The log is
the only source of personalization signal; ``HistoryStore`` persists it as a
whole JSON snapshot after every change.
"""

from __future__ import annotations

import json
import logging
import math
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmdpal.config.constants import MAX_HISTORY_LENGTH
from cmdpal.config.settings import get_history_path
from cmdpal.exceptions import HistoryLoadError, HistoryWriteError
from cmdpal.utils.json_files import atomic_write_json, backup_file, read_json

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class InteractionEvent:
    """One palette selection."""

    query: str
    command_id: str
    timestamp: int  # milliseconds since the epoch

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query, "commandID": self.command_id, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, entry: Any) -> InteractionEvent | None:
        """Parse a persisted entry, returning None if it is malformed."""
        if not isinstance(entry, dict):
            return None
        query = entry.get("query")
        command_id = entry.get("commandID")
        timestamp = entry.get("timestamp")
        if not isinstance(query, str) or not isinstance(command_id, str):
            return None
        # bool is an int subclass but never a valid timestamp
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            return None
        return cls(query=query, command_id=command_id, timestamp=int(timestamp))


@dataclass
class InteractionLog:
    """Most-recent-first sequence of interaction events."""

    events: list[InteractionEvent] = field(default_factory=list)
    max_length: int = MAX_HISTORY_LENGTH

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[InteractionEvent]:
        return iter(self.events)

    def __getitem__(self, index: int) -> InteractionEvent:
        return self.events[index]

    @property
    def command_ids(self) -> list[str]:
        """Distinct command ids, most recently used first."""
        return list(dict.fromkeys(event.command_id for event in self.events))

    def add(self, query: str, command_id: str, timestamp: int | None = None) -> InteractionEvent:
        """Prepend a new event, dropping the oldest ones past ``max_length``."""
        event = InteractionEvent(
            query=query,
            command_id=command_id,
            timestamp=_now_ms() if timestamp is None else timestamp,
        )
        self.events.insert(0, event)
        if len(self.events) > self.max_length:
            del self.events[self.max_length:]
        return event

    def clear(self) -> None:
        self.events = []

    def to_list(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.events]


@dataclass
class LoadResult:
    """Outcome of loading the persisted log."""

    log: InteractionLog
    notice: str | None = None  # One-time message for the user, if any
    repaired: bool = False  # Malformed entries were dropped


class HistoryStore:
    """Reads and writes the interaction log as a JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_history_path()

    def read(self) -> tuple[InteractionLog, int]:
        """Read the persisted log.

        A missing file is an empty log. Malformed entries are dropped.

        Returns:
            Tuple of (log, number of entries dropped)

        Raises:
            HistoryLoadError: If the file exists but is not a JSON array
        """
        try:
            data = read_json(self.path)
        except FileNotFoundError:
            logger.debug("History file not found, starting with empty history")
            return InteractionLog(), 0
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise HistoryLoadError("History file is corrupt", path=str(self.path)) from e
        except OSError as e:
            raise HistoryLoadError(f"History file unreadable: {e}", path=str(self.path)) from e

        if not isinstance(data, list):
            raise HistoryLoadError("History file is not a list", path=str(self.path))

        events = []
        dropped = 0
        for entry in data:
            event = InteractionEvent.from_dict(entry)
            if event is None:
                logger.warning(f"Invalid history entry removed: {entry!r}")
                dropped += 1
                continue
            events.append(event)
        return InteractionLog(events=events[:MAX_HISTORY_LENGTH]), dropped

    def load(self) -> LoadResult:
        """Load the log, degrading to an empty one on any error.

        A corrupt file is moved to ``history.json.bak`` and reported through
        ``LoadResult.notice``. A file with malformed entries is rewritten
        without them.
        """
        try:
            log, dropped = self.read()
        except HistoryLoadError as e:
            logger.error(f"{e}")
            return LoadResult(log=InteractionLog(), notice=self._backup_notice())

        if dropped:
            logger.warning("History validation failed, saving corrected version")
            try:
                self.write(log)
            except HistoryWriteError as e:
                logger.warning(f"{e}")
        return LoadResult(log=log, repaired=bool(dropped))

    def write(self, log: InteractionLog) -> None:
        """Write the whole log snapshot atomically.

        Raises:
            HistoryWriteError: If the file cannot be written
        """
        try:
            atomic_write_json(self.path, log.to_list())
        except OSError as e:
            raise HistoryWriteError(f"{e}", path=str(self.path)) from e
        logger.debug(f"History written ({len(log)} events)")

    def _backup_notice(self) -> str | None:
        try:
            backup = backup_file(self.path)
        except OSError as e:
            logger.error(f"Failed to create history backup: {e}")
            return "There was an error reading your history file. Starting with empty history."
        if backup is None:
            return None
        return (
            "There was an error reading your history file so a backup was "
            f"created at {backup}. Starting with empty history."
        )
