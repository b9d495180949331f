"""Database identifiers and on-disk file identity.

A database is identified by its name and by the pair of files the engine
keeps for it. Names end up inside DDL text, so they are validated against
an allow-list on construction rather than escaped later.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from localdb.domain.errors import InvalidDatabaseNameError

DATA_FILE_EXTENSION = ".mdf"
LOG_FILE_SUFFIX = "_log.ldf"

# sysname is 128 characters; the logical log file name appends "_log".
MAX_NAME_LENGTH = 123

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class DatabaseName:
    """Validated SQL Server database name.

    Only ASCII letters, digits and underscores are accepted, and the first
    character may not be a digit. Such names need no escaping in file names,
    N'' literals or bracketed identifiers.

    Example:
        >>> DatabaseName("acct_test").quoted
        '[acct_test]'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate the name against the allow-list."""
        if not isinstance(self.value, str):
            raise InvalidDatabaseNameError(
                f"database name must be str, got {type(self.value).__name__}"
            )
        if not self.value or len(self.value) > MAX_NAME_LENGTH:
            raise InvalidDatabaseNameError(
                f"database name must be 1-{MAX_NAME_LENGTH} characters, got {len(self.value)}"
            )
        if not _NAME_PATTERN.match(self.value):
            raise InvalidDatabaseNameError(
                f"invalid database name {self.value!r}: "
                "use letters, digits and underscores, not starting with a digit"
            )

    @property
    def quoted(self) -> str:
        """Bracket-quoted identifier for use in DDL."""
        return f"[{self.value}]"

    @property
    def log_name(self) -> str:
        """Logical name of the transaction log file."""
        return f"{self.value}_log"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class DatabaseFiles:
    """The data and log files that make up a database on disk."""

    data_file: Path
    log_file: Path

    @classmethod
    def for_database(cls, name: DatabaseName | str, base_path: str | Path) -> DatabaseFiles:
        base = Path(base_path)
        return cls(
            data_file=base / f"{name}{DATA_FILE_EXTENSION}",
            log_file=base / f"{name}{LOG_FILE_SUFFIX}",
        )

    @property
    def base_path(self) -> Path:
        return self.data_file.parent

    def exists(self) -> bool:
        """Return True if the data file is present. The log file is not checked."""
        return self.data_file.is_file()
