"""JSON file helpers shared by the history and preference stores.

Writes go to a temp file that is renamed over the target, so a crash
mid-write never leaves a truncated file behind.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from cmdpal.config.constants import BACKUP_SUFFIX, TEMP_SUFFIX

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """Read and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the content is not valid JSON
        OSError: On other read failures
    """
    return json.loads(path.read_text(encoding="utf-8"))


def backup_file(path: Path) -> Optional[Path]:
    """Move ``path`` aside to ``<name>.bak``, replacing an older backup.

    Returns:
        The backup path, or None if there was nothing to back up
    """
    if not path.exists():
        return None
    backup_path = path.with_name(path.name + BACKUP_SUFFIX)
    os.replace(path, backup_path)
    logger.debug(f"Backed up {path} to {backup_path}")
    return backup_path


def atomic_write_json(path: Path, data: Any, keep_backup: bool = True) -> None:
    """Write ``data`` as indented JSON using a temp file and rename.

    Args:
        path: Destination file
        data: JSON-serializable payload
        keep_backup: Move the current file to ``<name>.bak`` before replacing it

    Raises:
        OSError: If the temp file cannot be written or renamed
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + TEMP_SUFFIX)
    tmp_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    if keep_backup and path.exists():
        try:
            backup_file(path)
        except OSError as e:
            # Continue with the write even if the backup fails
            logger.warning(f"Could not back up {path}: {e}")

    os.replace(tmp_path, path)
