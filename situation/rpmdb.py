"""Location of the rpm sqlite database."""

from __future__ import annotations

import os
from typing import Optional

from situation.files import file_exists

FILE_NAME = "rpmdb.sqlite"
DEFAULT_PATH = "/var/lib/rpm/rpmdb.sqlite"
FALLBACK_DIRECTORY = "/usr/lib"


def _walk(directory: str) -> Optional[str]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return None
    for entry in entries:
        if entry.name == FILE_NAME:
            return entry.path
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            found = _walk(entry.path)
            if found is not None:
                return found
    return None


def find_db_file(
    default_path: str = DEFAULT_PATH, fallback_directory: str = FALLBACK_DIRECTORY
) -> str:
    """Return the rpm database path.

    The default path wins when it exists; otherwise the fallback directory
    is walked in lexical order for the first rpmdb.sqlite entry.
    """
    if file_exists(default_path):
        return default_path
    if os.path.basename(os.path.normpath(fallback_directory)) == FILE_NAME:
        if file_exists(fallback_directory):
            return fallback_directory
    found = _walk(fallback_directory)
    if found is None:
        raise FileNotFoundError("DB file not found")
    return found