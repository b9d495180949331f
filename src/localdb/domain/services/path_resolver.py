"""Path resolution for database files.

Files live under a base directory which defaults to a ``Data`` folder next
to the running program:

    <base>/<name>.mdf       data file
    <base>/<name>_log.ldf   log file
"""

from __future__ import annotations

import sys
from pathlib import Path

from localdb.domain.value_objects import DatabaseFiles, DatabaseName

DEFAULT_DATA_FOLDER = "Data"


def _executable_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv else ""
    if script and script != "-c":
        return Path(script).resolve().parent
    return Path.cwd()


def default_path() -> Path:
    """Return ``<dir of running executable>/Data`` as an absolute path.

    The directory is not created.
    """
    return _executable_dir() / DEFAULT_DATA_FOLDER


def full_path(name: DatabaseName | str, base_path: str | Path) -> Path:
    """Return the data file path ``base_path/name.mdf``."""
    return DatabaseFiles.for_database(name, base_path).data_file


def log_path(name: DatabaseName | str, base_path: str | Path) -> Path:
    """Return the log file path ``base_path/name_log.ldf``."""
    return DatabaseFiles.for_database(name, base_path).log_file
