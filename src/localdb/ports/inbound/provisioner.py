"""Database Provisioner port.

This inbound port defines the operations offered to callers for managing
the lifecycle of a LocalDB database file:

    absent --create--> attached --detach--> detached --remove--> absent

Existence is judged by the data file alone; the engine catalog is only
consulted by detach.
"""

from __future__ import annotations

from abc import abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Literal, Protocol

from localdb.domain.value_objects import DetachResult
from localdb.ports.outbound import EngineConnection

IfExists = Literal["fail", "replace"]


class DatabaseProvisioner(Protocol):
    """Protocol for provisioning LocalDB databases.

    ``base_path`` defaults to the configured data directory, or
    ``<executable dir>/Data`` when none is configured.
    """

    @abstractmethod
    def exists(self, name: str, base_path: str | Path | None = None) -> bool:
        """Return True if the database's data file exists."""
        ...

    @abstractmethod
    def create(
        self,
        name: str,
        base_path: str | Path | None = None,
        schema: str | None = None,
        if_exists: IfExists | None = None,
    ) -> Path:
        """Create and attach a database, optionally running a schema batch.

        Returns:
            Path of the new data file.

        Raises:
            InvalidDatabaseNameError: If name fails validation.
            DatabaseExistsError: If the data file exists and if_exists is "fail".
        """
        ...

    @abstractmethod
    def detach(self, name: str) -> DetachResult:
        """Detach a database from the engine. Never raises engine errors."""
        ...

    @abstractmethod
    def remove(
        self,
        name: str,
        base_path: str | Path | None = None,
        missing_ok: bool = False,
    ) -> None:
        """Delete the log and data files.

        Raises:
            OSError: If a file is missing (unless missing_ok) or locked.
        """
        ...

    @abstractmethod
    def get_connection(self, name: str, base_path: str | Path | None = None) -> EngineConnection:
        """Open a caller-owned connection to the database.

        Raises:
            DatabaseNotFoundError: If the data file does not exist.
        """
        ...

    @abstractmethod
    def connect(
        self, name: str, base_path: str | Path | None = None
    ) -> AbstractContextManager[EngineConnection]:
        """Scoped variant of get_connection(); closes the connection on exit."""
        ...
