"""
Command Palette - session state around the query engine.

Provides:
- PalettePresenter: context object owning registry, history and preferences
- PaletteState: current query, results and selection
- QueryDebouncer: keystroke coalescing with last-write-wins results
"""

from .debounce import QueryDebouncer
from .presenter import PalettePresenter, PaletteState

__all__ = [
    "PalettePresenter",
    "PaletteState",
    "QueryDebouncer",
]
