"""Configuration for cmdpal: constants, data paths and user preferences."""

from .settings import get_data_dir, get_history_path, get_user_path

__all__ = ["get_data_dir", "get_history_path", "get_user_path"]
