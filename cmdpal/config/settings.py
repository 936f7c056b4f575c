"""Configuration utilities for cmdpal."""

import os
from pathlib import Path

from .constants import CMDPAL_CONFIG_DIR, HISTORY_FILE_NAME, USER_FILE_NAME


def get_data_dir() -> Path:
    """Get the data directory, respecting the CMDPAL_DATA_DIR environment variable.

    When running tests, set CMDPAL_DATA_DIR to a temp directory to keep
    tests away from the real history and preference files.
    """
    override = os.environ.get("CMDPAL_DATA_DIR")
    data_dir = Path(override) if override else CMDPAL_CONFIG_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_history_path() -> Path:
    """Path of the persisted interaction log."""
    return get_data_dir() / HISTORY_FILE_NAME


def get_user_path() -> Path:
    """Path of the persisted user preferences."""
    return get_data_dir() / USER_FILE_NAME
