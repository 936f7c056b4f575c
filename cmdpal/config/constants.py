"""
Centralized constants for cmdpal.

Scoring weights, display limits and persistence names live here so the
ranking behaviour can be read in one place.
"""

from pathlib import Path

# =============================================================================
# PATHS & FILE NAMES
# =============================================================================

CMDPAL_CONFIG_DIR = Path.home() / ".config" / "cmdpal"

HISTORY_FILE_NAME = "history.json"
USER_FILE_NAME = "user.json"
BACKUP_SUFFIX = ".bak"
TEMP_SUFFIX = ".tmp"

# =============================================================================
# DISPLAY & HISTORY LIMITS
# =============================================================================

MAX_RESULTS = 9  # Palette shows at most 9 results at a time
MAX_HISTORY_LENGTH = 1000  # Keep the history file from growing unbounded

# =============================================================================
# INPUT HANDLING
# =============================================================================

DEBOUNCE_SECONDS = 0.1  # Coalesce keystrokes arriving within this window
TYPE_FILTER_PREFIX = "#"

# =============================================================================
# SCORING WEIGHTS
# =============================================================================

PREFIX_BONUS = 1.0  # Name chunk starts with the query chunk
WORD_MATCH_BONUS = 2.0  # Name chunk equals the query chunk
EXACT_NAME_BONUS = 5.0  # Whole name equals the whole query
LATCH_BONUS = 10.0  # Query previously resolved to this command most often
OCCURRENCE_BONUS = 2.5  # Command was chosen at least once

# =============================================================================
# HIGHLIGHTING
# =============================================================================

HIGHLIGHT_OPEN = "<strong>"
HIGHLIGHT_CLOSE = "</strong>"
HIGHLIGHT_STYLE = "bold cyan"  # Rich style for matched characters in CLI output

# =============================================================================
# BUILTIN COMMANDS
# =============================================================================

DEFAULT_STARTUP_COMMANDS = ["builtin_about"]
RELOAD_COMMAND_ID = "builtin_reload"  # Never recorded, so external edits survive
