"""
Presenter for the command palette.

Owns the per-session context (command registry, interaction log,
personalization index, user preferences) and exposes the two calls a host
UI needs: ``search`` for typed text and ``record_selection`` for the
command the user picked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cmdpal.commands.command import Command
from cmdpal.commands.executor import ExecutorRegistry
from cmdpal.commands.registry import CommandRegistry
from cmdpal.config.constants import RELOAD_COMMAND_ID
from cmdpal.config.user_prefs import PreferencesStore, UserPreferences
from cmdpal.core.history import HistoryStore, InteractionLog
from cmdpal.core.personalization import PersonalizationIndex
from cmdpal.core.query import PaletteContext, QueryFilters, QueryResult, parse_query, search
from cmdpal.exceptions import CommandExecutionError, HistoryWriteError

logger = logging.getLogger(__name__)


@dataclass
class PaletteState:
    """Current state of the palette."""

    query: str = ""
    results: list[QueryResult] = field(default_factory=list)
    selected_index: int = 0


class PalettePresenter:
    """
    Handles command palette business logic.

    Every change to the interaction log is followed by an index rebuild
    before the method returns, so the next search always ranks against
    fresh personalization data.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        history_store: HistoryStore | None = None,
        prefs: UserPreferences | None = None,
        executors: ExecutorRegistry | None = None,
        filters: QueryFilters | None = None,
        on_state_update: Callable[[PaletteState], None] | None = None,
    ):
        self.registry = registry
        self.history_store = history_store or HistoryStore()
        self.prefs = prefs or UserPreferences()
        self.executors = executors
        self.filters = filters or QueryFilters()
        self.on_state_update = on_state_update
        self._state = PaletteState()
        self._log = InteractionLog()
        self._index = PersonalizationIndex.empty()
        self._notice: str | None = None
        self.reload_history()

    @classmethod
    def from_data_dir(
        cls,
        registry_factory: Callable[[UserPreferences], CommandRegistry],
        prefs_store: PreferencesStore | None = None,
        history_store: HistoryStore | None = None,
        **kwargs: Any,
    ) -> PalettePresenter:
        """Load preferences, build the registry from them, and load history."""
        prefs_store = prefs_store or PreferencesStore()
        prefs, notice = prefs_store.load()
        presenter = cls(
            registry_factory(prefs),
            history_store=history_store,
            prefs=prefs,
            **kwargs,
        )
        if notice and presenter._notice is None:
            presenter._notice = notice
        return presenter

    @property
    def state(self) -> PaletteState:
        """Get current state."""
        return self._state

    @property
    def log(self) -> InteractionLog:
        return self._log

    @property
    def index(self) -> PersonalizationIndex:
        return self._index

    @property
    def context(self) -> PaletteContext:
        return PaletteContext(index=self._index, prefs=self.prefs)

    def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            self.on_state_update(self._state)

    def _rebuild_index(self) -> None:
        self._index = PersonalizationIndex.rebuild(self._log)

    def pop_notice(self) -> str | None:
        """Return the pending user notice once, then forget it."""
        notice, self._notice = self._notice, None
        return notice

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def search(self, text: str) -> list[QueryResult]:
        """Run a query against the registry and publish the results."""
        results = search(text, self.registry, self.filters, self.context)
        self._state.query = text
        self._state.results = results
        self._state.selected_index = 0
        self._notify_update()
        return results

    def query(self, text: str) -> list[Command]:
        return [result.command for result in self.search(text)]

    def move_selection(self, delta: int) -> None:
        """Move selection up or down, wrapping at either end."""
        count = len(self._state.results)
        if count == 0:
            return
        self._state.selected_index = (self._state.selected_index + delta) % count
        self._notify_update()

    def get_selected_result(self) -> QueryResult | None:
        """Get the currently selected result."""
        if 0 <= self._state.selected_index < len(self._state.results):
            return self._state.results[self._state.selected_index]
        return None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def record_selection(self, query: str, command_id: str) -> bool:
        """Append a selection to the log, rebuild the index and persist.

        The query is stored without its ``#type`` token, so ``"#tool crop"``
        latches under ``"crop"``. The reload command is never recorded so an
        external edit of the data files survives the reload. A failed write
        is logged; the in-memory log and index keep the new event.

        Returns:
            True if the selection was recorded
        """
        if command_id == RELOAD_COMMAND_ID:
            logger.debug("Reload command selected, history left untouched")
            return False

        self._log.add(parse_query(query).text, command_id)
        self._rebuild_index()
        self._persist()
        return True

    def execute_selected(self) -> Command | None:
        """Record and execute the selected result.

        Returns:
            The selected command, or None if nothing was selected
        """
        result = self.get_selected_result()
        if not result:
            return None

        command = result.command
        self.record_selection(self._state.query, command.id)

        if self.executors is not None:
            try:
                self.executors.execute(command)
            except CommandExecutionError as e:
                logger.error(f"{e}")
                self._notice = f"Command could not be executed: {e.message}"
        return command

    def clear_history(self) -> None:
        """Empty the log and the index, and persist the empty log."""
        self._log.clear()
        self._rebuild_index()
        self._persist()
        logger.info("History cleared")

    def reload_history(self) -> None:
        """Reload the log from the store and rebuild the index."""
        result = self.history_store.load()
        self._log = result.log
        self._rebuild_index()
        if result.notice:
            self._notice = result.notice

    def reload_commands(self, registry: CommandRegistry) -> None:
        """Swap in a freshly loaded command set."""
        self.registry = registry
        self._state = PaletteState()
        self._notify_update()

    def _persist(self) -> None:
        try:
            self.history_store.write(self._log)
        except HistoryWriteError as e:
            logger.error(f"History data write failed: {e}")
            self._notice = "There was an error writing your history file."
