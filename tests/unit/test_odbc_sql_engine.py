"""Unit tests for OdbcSqlEngine connection strings."""

from __future__ import annotations

import sys
import types
from pathlib import Path
from typing import Any

import pytest

from localdb.adapters.outbound import OdbcSqlEngine, quote_value
from localdb.infrastructure.config import ServerConfig


class TestQuoteValue:
    """Tests for ODBC value quoting."""

    def test_plain_value_unquoted(self) -> None:
        assert quote_value(r"(localdb)\MSSQLLocalDB") == r"(localdb)\MSSQLLocalDB"

    def test_semicolon_is_braced(self) -> None:
        assert quote_value("C:\\a;b\\x.mdf") == "{C:\\a;b\\x.mdf}"

    def test_closing_brace_doubled(self) -> None:
        assert quote_value("p}w") == "{p}}w}"

    def test_surrounding_whitespace_braced(self) -> None:
        assert quote_value(" x") == "{ x}"


class TestConnectionString:
    """Tests for OdbcSqlEngine.connection_string()."""

    def test_master_trusted(self) -> None:
        engine = OdbcSqlEngine()
        assert engine.connection_string() == (
            "Driver={ODBC Driver 17 for SQL Server};"
            "Server=(localdb)\\MSSQLLocalDB;"
            "Database=master;"
            "Trusted_Connection=yes;"
        )

    def test_attach_file(self, temp_dir: Path) -> None:
        """Attaching points the endpoint at the data file."""
        engine = OdbcSqlEngine(ServerConfig(instance=r"(localdb)\v11.0"))
        data_file = temp_dir / "acct_test.mdf"

        conn_str = engine.connection_string("acct_test", data_file)

        assert "Server=(localdb)\\v11.0;" in conn_str
        assert "Database=acct_test;" in conn_str
        assert f"AttachDBFileName={data_file};" in conn_str

    def test_sql_login(self) -> None:
        engine = OdbcSqlEngine(
            ServerConfig(trusted_connection=False, username="sa", password="p;w")
        )
        conn_str = engine.connection_string()
        assert "Trusted_Connection" not in conn_str
        assert "UID=sa;" in conn_str
        assert "PWD={p;w};" in conn_str

    def test_connect_uses_autocommit_and_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """connect() hands the string to pyodbc with autocommit on."""
        calls: list[tuple[str, dict[str, Any]]] = []

        fake = types.ModuleType("pyodbc")
        fake.Error = type("Error", (Exception,), {})  # type: ignore[attr-defined]
        fake.connect = lambda conn_str, **kwargs: calls.append((conn_str, kwargs)) or "conn"  # type: ignore[attr-defined]
        monkeypatch.setitem(sys.modules, "pyodbc", fake)

        engine = OdbcSqlEngine(ServerConfig(login_timeout_seconds=5))
        assert engine.connect() == "conn"
        assert engine.error_types == (fake.Error,)  # type: ignore[attr-defined]

        conn_str, kwargs = calls[0]
        assert conn_str == engine.connection_string()
        assert kwargs == {"autocommit": True, "timeout": 5}
