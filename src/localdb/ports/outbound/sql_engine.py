"""SQL Engine port for talking to the database server.

This outbound port defines the contract the provisioner needs from a
database engine: open a connection to the server (optionally bound to a
database, optionally attaching a data file) and run statements on it.

The connection and cursor protocols are the subset of DB-API 2.0 that
pyodbc provides and the provisioner uses. Connections returned by
``connect`` are in autocommit mode, since CREATE DATABASE and
sp_detach_db cannot run inside a user transaction.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol


class EngineCursor(Protocol):
    """Cursor returned by EngineConnection.execute()."""

    @property
    @abstractmethod
    def rowcount(self) -> int:
        """Rows affected by the last statement, or -1 if not applicable."""
        ...

    @abstractmethod
    def fetchone(self) -> Any:
        """Fetch the next row of a result set, or None."""
        ...

    @abstractmethod
    def nextset(self) -> bool | None:
        """Advance to the next result set of a batch; falsy when exhausted."""
        ...

    @abstractmethod
    def close(self) -> None:
        ...


class EngineConnection(Protocol):
    """An open connection to the engine."""

    @abstractmethod
    def execute(self, sql: str, *params: Any) -> EngineCursor:
        """Execute a statement or batch with qmark parameters.

        Raises:
            The engine's native error type on failure.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release the engine session."""
        ...


class SqlEngine(Protocol):
    """Protocol for connecting to a SQL Server engine.

    Implementations must not swallow engine errors; they propagate as
    the driver's native exception types, listed in ``error_types``.
    """

    @property
    @abstractmethod
    def error_types(self) -> tuple[type[BaseException], ...]:
        """Exception types raised by this engine for server-side failures."""
        ...

    @abstractmethod
    def connect(
        self,
        database: str = "master",
        attach_file: Path | None = None,
    ) -> EngineConnection:
        """Open an autocommit connection.

        Args:
            database: Initial catalog.
            attach_file: Data file to attach as ``database`` if the engine
                does not already have it attached.

        Returns:
            An open connection owned by the caller.

        Raises:
            The engine's native error type if the connection fails.
        """
        ...
