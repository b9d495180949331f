"""Errors raised by the provisioner.

Engine errors (the driver's own exception types) and file-system errors
(OSError) are not wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class LocalDBError(Exception):
    """Base class for provisioner errors."""

    pass


class InvalidDatabaseNameError(LocalDBError, ValueError):
    """Raised when a database name fails allow-list validation."""

    pass


class DatabaseNotFoundError(LocalDBError):
    """Raised when the data file for a database does not exist."""

    def __init__(self, name: str, path: object) -> None:
        super().__init__(f"Database '{name}' not found at {path}")
        self.name = name
        self.path = path


class DatabaseExistsError(LocalDBError):
    """Raised when creating a database whose data file is already present."""

    def __init__(self, name: str, path: object) -> None:
        super().__init__(f"Database '{name}' already exists at {path}")
        self.name = name
        self.path = path


class DetachError(LocalDBError):
    """Raised by DetachResult.raise_for_failure() for a failed detach."""

    pass
