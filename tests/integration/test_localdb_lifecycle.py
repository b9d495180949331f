"""Integration tests against a real SQL Server LocalDB instance.

Run with LOCALDB_INTEGRATION=1 on a machine with LocalDB and the
Microsoft ODBC Driver for SQL Server installed. The server endpoint is
taken from the usual LOCALDB_SERVER__* settings.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from localdb.application import LocalDB
from localdb.domain.errors import DatabaseNotFoundError
from localdb.infrastructure.config import Config
from localdb.infrastructure.metrics import MetricsRegistry

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("LOCALDB_INTEGRATION") != "1",
        reason="set LOCALDB_INTEGRATION=1 to run against a real LocalDB",
    ),
]


@pytest.fixture
def real_db(metrics_registry: MetricsRegistry) -> LocalDB:
    pytest.importorskip("pyodbc")
    return LocalDB(config=Config(), metrics=metrics_registry)


class TestLocalDBLifecycle:
    """End-to-end provisioning against LocalDB."""

    def test_create_connect_detach_remove(self, real_db: LocalDB, temp_dir: Path) -> None:
        name = "acct_test"
        real_db.detach(name)

        data_file = real_db.create(name, temp_dir)
        try:
            assert data_file.is_file()
            assert data_file.suffix == ".mdf"

            with real_db.connect(name, temp_dir) as conn:
                assert conn.execute("SELECT DB_NAME()").fetchone()[0] == name
        finally:
            real_db.detach(name)

        real_db.remove(name, temp_dir)

        assert not real_db.files(name, temp_dir).data_file.exists()
        assert not real_db.files(name, temp_dir).log_file.exists()
        assert real_db.detach(name).ok

    def test_schema_and_inserts(self, real_db: LocalDB, temp_dir: Path) -> None:
        name = "acct_schema_test"
        real_db.detach(name)

        schema = "CREATE TABLE Accounts (Id INT PRIMARY KEY, Name NVARCHAR(50));"
        real_db.create(name, temp_dir, schema=schema)
        try:
            affected = 0
            with real_db.connect(name, temp_dir) as conn:
                affected += conn.execute("INSERT INTO Accounts VALUES (?, ?)", 1, "a").rowcount
                affected += conn.execute("INSERT INTO Accounts VALUES (?, ?)", 2, "b").rowcount
            assert affected == 2
        finally:
            real_db.detach(name)
            real_db.remove(name, temp_dir, missing_ok=True)

    def test_missing_database(self, real_db: LocalDB, temp_dir: Path) -> None:
        with pytest.raises(DatabaseNotFoundError, match="not_there"):
            real_db.get_connection("not_there", temp_dir)
