"""
Input validation and collision-safe renaming.
"""

import asyncio
import logging
import os
from pathlib import Path

from .constants import ALLOWED_EXTENSIONS
from .core import RenameError

logger = logging.getLogger(__name__)


def does_file_exist(file_path: Path) -> bool:
    """Check that the path exists and is a regular file."""
    try:
        return file_path.is_file()
    except OSError:
        return False


def is_file_readable(file_path: Path) -> bool:
    """Check that the path is a regular file the process can read."""
    return does_file_exist(file_path) and os.access(file_path, os.R_OK)


def filter_valid_image_paths(paths: list[Path]) -> list[Path]:
    """Admit readable files with a supported image extension.

    Duplicates are dropped; input order is kept otherwise.
    """
    valid_paths = []
    for path in dict.fromkeys(paths):
        if path.suffix.lower() not in ALLOWED_EXTENSIONS:
            logger.debug("Ignoring %s: unsupported extension", path)
            continue
        if not is_file_readable(path):
            logger.debug("Ignoring %s: missing or unreadable", path)
            continue
        valid_paths.append(path)
    return valid_paths


class RenameCoordinator:
    """Serializes destination checks and renames across all pipelines.

    A single lock guards the check-then-rename pair so that two pipelines
    can never both see a destination as free. Encoding and description
    happen outside the lock.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    async def try_rename(self, source: Path, destination: Path) -> bool:
        """Rename source to destination unless the destination is taken.

        Returns False, without renaming, if a regular file already exists
        at the destination. Raises RenameError if the rename call fails.
        """
        async with self._lock:
            if await asyncio.to_thread(does_file_exist, destination):
                logger.debug("Destination %s already exists", destination)
                return False

            try:
                await asyncio.to_thread(os.rename, source, destination)
            except OSError as e:
                raise RenameError(
                    f"Cannot rename {source} to {destination}: {e}"
                ) from e

        return True
