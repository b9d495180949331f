"""ODBC SQL Engine implementation.

This adapter implements the SqlEngine protocol with pyodbc and the
Microsoft ODBC Driver for SQL Server. Connection strings look like:

    Driver={ODBC Driver 17 for SQL Server};Server=(localdb)\\MSSQLLocalDB;
    Database=master;Trusted_Connection=yes;

and, when a data file should be attached on connect:

    ...;Database=acct_test;AttachDBFileName=C:\\Data\\acct_test.mdf;

pyodbc is imported on first use so the rest of the package works on
machines without an ODBC driver manager.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from localdb.infrastructure.config import ServerConfig

if TYPE_CHECKING:
    import pyodbc

_SPECIAL_CHARS = (";", "{", "}", "=")


def quote_value(value: str) -> str:
    """Quote an ODBC connection string value if it needs it.

    Values containing separators or braces, or with surrounding whitespace,
    are wrapped in braces with closing braces doubled.
    """
    if value != value.strip() or any(ch in value for ch in _SPECIAL_CHARS):
        return "{" + value.replace("}", "}}") + "}"
    return value


class OdbcSqlEngine:
    """pyodbc implementation of the SqlEngine protocol.

    Attributes:
        server: Endpoint configuration (instance, driver, authentication).
    """

    def __init__(self, server: ServerConfig | None = None) -> None:
        self._server = server or ServerConfig()

    @property
    def server(self) -> ServerConfig:
        return self._server

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        import pyodbc

        return (pyodbc.Error,)

    def connection_string(
        self,
        database: str = "master",
        attach_file: Path | None = None,
    ) -> str:
        """Build the ODBC connection string for a database."""
        parts = [
            ("Driver", "{" + self._server.driver.replace("}", "}}") + "}"),
            ("Server", quote_value(self._server.instance)),
            ("Database", quote_value(database)),
        ]
        if self._server.trusted_connection:
            parts.append(("Trusted_Connection", "yes"))
        else:
            parts.append(("UID", quote_value(self._server.username or "")))
            password = self._server.password.get_secret_value() if self._server.password else ""
            parts.append(("PWD", quote_value(password)))
        if attach_file is not None:
            parts.append(("AttachDBFileName", quote_value(str(attach_file))))
        return "".join(f"{key}={value};" for key, value in parts)

    def connect(
        self,
        database: str = "master",
        attach_file: Path | None = None,
    ) -> pyodbc.Connection:
        """Open an autocommit connection to the configured server.

        Raises:
            pyodbc.Error: If the server rejects the login or attach.
        """
        import pyodbc

        return pyodbc.connect(
            self.connection_string(database, attach_file),
            autocommit=True,
            timeout=self._server.login_timeout_seconds,
        )
