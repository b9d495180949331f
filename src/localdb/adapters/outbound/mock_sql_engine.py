"""Mock SQL engine for testing and development.

This adapter provides an in-memory implementation of the SqlEngine
protocol for use in tests and on machines without SQL Server LocalDB.

It understands the statements the provisioner issues (CREATE DATABASE,
USE, ALTER DATABASE ... SINGLE_USER, sp_detach_db, DB_ID, DB_NAME) and
keeps a catalog of attached databases. CREATE DATABASE writes
placeholder data and log files so file-level behavior can be observed.
Any other statement run against a user database is recorded; INSERT
statements report one affected row each.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from localdb.infrastructure.logging import get_logger


logger = get_logger(__name__)

_CREATE_DATABASE = re.compile(
    r"^\s*CREATE\s+DATABASE\s+\[(?P<name>\w+)\]\s+ON\s*"
    r"\(\s*NAME\s*=\s*N'(?:[^']|'')*'\s*,\s*FILENAME\s*=\s*N'(?P<data>(?:[^']|'')*)'\s*\)\s*"
    r"LOG\s+ON\s*"
    r"\(\s*NAME\s*=\s*N'(?:[^']|'')*'\s*,\s*FILENAME\s*=\s*N'(?P<log>(?:[^']|'')*)'\s*\)\s*;?\s*$",
    re.IGNORECASE,
)
_USE = re.compile(r"^\s*USE\s+\[?(?P<name>\w+)\]?\s*;?\s*$", re.IGNORECASE)
_SINGLE_USER = re.compile(
    r"^\s*ALTER\s+DATABASE\s+\[(?P<name>\w+)\]\s+SET\s+SINGLE_USER\s+WITH\s+ROLLBACK\s+IMMEDIATE\s*;?\s*$",
    re.IGNORECASE,
)
_DETACH = re.compile(r"^\s*EXEC\s+sp_detach_db\b", re.IGNORECASE)
_DB_ID = re.compile(r"^\s*SELECT\s+DB_ID\(\s*\?\s*\)\s*;?\s*$", re.IGNORECASE)
_DB_NAME = re.compile(r"^\s*SELECT\s+DB_NAME\(\s*\)\s*;?\s*$", re.IGNORECASE)
_INSERT = re.compile(r"^\s*INSERT\b", re.IGNORECASE)

_PLACEHOLDER_PAGE = b"\x00" * 8192


class MockEngineError(Exception):
    """Error raised by the mock engine, standing in for the driver's error."""

    pass


@dataclass
class MockCursor:
    """Cursor over an in-memory result."""

    rows: list[tuple[Any, ...]] = field(default_factory=list)
    rowcount: int = -1

    def fetchone(self) -> tuple[Any, ...] | None:
        if not self.rows:
            return None
        return self.rows.pop(0)

    def nextset(self) -> bool:
        return False

    def close(self) -> None:
        self.rows.clear()


class MockConnection:
    """Connection to a MockSqlEngine."""

    def __init__(self, engine: MockSqlEngine, database: str) -> None:
        self._engine = engine
        self.database = database
        self.closed = False

    def execute(self, sql: str, *params: Any) -> MockCursor:
        if self.closed:
            raise MockEngineError("Attempt to use a closed connection")
        return self._engine._execute(self, sql, params)

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._engine._release(self)


@dataclass
class _Failure:
    pattern: re.Pattern[str]
    message: str
    remaining: int


class MockSqlEngine:
    """Mock implementation of SqlEngine for testing.

    Example:
        engine = MockSqlEngine()
        conn = engine.connect()
        conn.execute("CREATE DATABASE [demo] ON (...) LOG ON (...)")
        engine.is_attached("demo")  # True
    """

    def __init__(self) -> None:
        self._catalog: dict[str, Path] = {}
        self._next_db_id = 5  # ids 1-4 are the system databases
        self._db_ids: dict[str, int] = {}
        self._open: list[MockConnection] = []
        self._failures: list[_Failure] = []
        self.statements: list[tuple[str, str]] = []  # (database, sql)

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        return (MockEngineError,)

    @property
    def open_connections(self) -> list[MockConnection]:
        return list(self._open)

    def is_attached(self, name: str) -> bool:
        return name.lower() in self._catalog

    def attached_file(self, name: str) -> Path | None:
        return self._catalog.get(name.lower())

    def fail_on(self, pattern: str, message: str = "injected failure", times: int = 1) -> None:
        """Make the next ``times`` statements matching ``pattern`` raise MockEngineError."""
        self._failures.append(_Failure(re.compile(pattern, re.IGNORECASE), message, times))

    def connect(
        self,
        database: str = "master",
        attach_file: Path | None = None,
    ) -> MockConnection:
        key = database.lower()
        if key != "master" and key not in self._catalog:
            if attach_file is None or not Path(attach_file).is_file():
                raise MockEngineError(f"Cannot open database \"{database}\" requested by the login")
            self._attach(database, Path(attach_file))
        conn = MockConnection(self, database)
        self._open.append(conn)
        return conn

    def _attach(self, name: str, data_file: Path) -> None:
        for attached_name, attached_file in self._catalog.items():
            if attached_file == data_file:
                raise MockEngineError(
                    f"Database '{attached_name}' is already attached from file {data_file}"
                )
        self._catalog[name.lower()] = data_file
        self._db_ids[name.lower()] = self._next_db_id
        self._next_db_id += 1
        logger.debug("mock_database_attached", name=name, data_file=str(data_file))

    def _release(self, conn: MockConnection) -> None:
        if conn in self._open:
            self._open.remove(conn)

    def _check_failures(self, sql: str) -> None:
        for failure in self._failures:
            if failure.remaining > 0 and failure.pattern.search(sql):
                failure.remaining -= 1
                raise MockEngineError(failure.message)

    def _execute(self, conn: MockConnection, sql: str, params: tuple[Any, ...]) -> MockCursor:
        self.statements.append((conn.database, sql))
        self._check_failures(sql)

        if match := _CREATE_DATABASE.match(sql):
            return self._create_database(
                match["name"],
                Path(match["data"].replace("''", "'")),
                Path(match["log"].replace("''", "'")),
            )
        if match := _USE.match(sql):
            name = match["name"]
            if name.lower() != "master" and name.lower() not in self._catalog:
                raise MockEngineError(f"Database '{name}' does not exist")
            conn.database = name
            return MockCursor()
        if match := _SINGLE_USER.match(sql):
            name = match["name"]
            self._require_attached(name)
            for other in list(self._open):
                if other is not conn and other.database.lower() == name.lower():
                    other.close()
            return MockCursor()
        if _DETACH.match(sql):
            name = str(params[0])
            self._require_attached(name)
            del self._catalog[name.lower()]
            del self._db_ids[name.lower()]
            logger.debug("mock_database_detached", name=name)
            return MockCursor()
        if _DB_ID.match(sql):
            return MockCursor(rows=[(self._db_ids.get(str(params[0]).lower()),)])
        if _DB_NAME.match(sql):
            return MockCursor(rows=[(conn.database,)])

        if conn.database.lower() == "master":
            raise MockEngineError(f"Statement not supported by mock engine: {sql!r}")
        self._require_attached(conn.database)
        return MockCursor(rowcount=1 if _INSERT.match(sql) else -1)

    def _require_attached(self, name: str) -> None:
        if name.lower() not in self._catalog:
            raise MockEngineError(
                f"Cannot find the database '{name}' because it does not exist "
                "or you do not have permission"
            )

    def _create_database(self, name: str, data_file: Path, log_file: Path) -> MockCursor:
        if name.lower() in self._catalog:
            raise MockEngineError(f"Database '{name}' already exists. Choose a different database name.")
        for path in (data_file, log_file):
            if path.exists():
                raise MockEngineError(f"Cannot create file '{path}' because it already exists.")
            if not path.parent.is_dir():
                raise MockEngineError(f"Directory lookup for the file \"{path}\" failed")
        data_file.write_bytes(_PLACEHOLDER_PAGE)
        log_file.write_bytes(_PLACEHOLDER_PAGE)
        self._attach(name, data_file)
        return MockCursor()
