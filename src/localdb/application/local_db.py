"""LocalDB - provisioning facade for SQL Server LocalDB databases.

This module provides the LocalDB class, which creates databases as
``.mdf``/``_log.ldf`` file pairs under a base directory, detaches and
deletes them, and opens connections to them.

Usage:
    from localdb import LocalDB

    db = LocalDB()
    db.create("acct_test", "/tmp/dbs", schema="CREATE TABLE t (id INT)")

    with db.connect("acct_test", "/tmp/dbs") as conn:
        conn.execute("INSERT INTO t VALUES (1)")

    db.detach("acct_test")
    db.remove("acct_test", "/tmp/dbs")

Engine errors from create and get_connection propagate unchanged. Detach
reports its outcome as a DetachResult instead of raising.
"""

from __future__ import annotations

from contextlib import closing, contextmanager
from pathlib import Path
from typing import Generator

from localdb.adapters.outbound.odbc_sql_engine import OdbcSqlEngine
from localdb.domain.errors import DatabaseExistsError, DatabaseNotFoundError
from localdb.domain.services.path_resolver import default_path
from localdb.domain.value_objects import (
    DatabaseFiles,
    DatabaseName,
    DetachOutcome,
    DetachResult,
)
from localdb.infrastructure.config import Config, get_config
from localdb.infrastructure.logging import get_logger
from localdb.infrastructure.metrics import MetricsRegistry, get_metrics
from localdb.infrastructure.tracing import trace_span
from localdb.ports.inbound import IfExists
from localdb.ports.outbound import EngineConnection, SqlEngine


def _literal(value: str | Path) -> str:
    """Render a Unicode string literal with embedded quotes doubled."""
    return "N'" + str(value).replace("'", "''") + "'"


def create_database_sql(name: DatabaseName, files: DatabaseFiles) -> str:
    """Build the CREATE DATABASE statement for a name and file pair."""
    return (
        f"CREATE DATABASE {name.quoted} "
        f"ON (NAME = {_literal(name.value)}, FILENAME = {_literal(files.data_file)}) "
        f"LOG ON (NAME = {_literal(name.log_name)}, FILENAME = {_literal(files.log_file)})"
    )


def single_user_sql(name: DatabaseName) -> str:
    return f"ALTER DATABASE {name.quoted} SET SINGLE_USER WITH ROLLBACK IMMEDIATE;"


DETACH_SQL = "EXEC sp_detach_db @dbname = ?, @skipchecks = 'true'"
DATABASE_ID_SQL = "SELECT DB_ID(?)"


class LocalDB:
    """Provisioning facade over a SQL Server engine.

    Holds the engine endpoint and defaults explicitly rather than as
    process-wide constants; each method is otherwise stateless and does
    its own round-trips.

    Thread Safety:
        No locking is done. Concurrent operations on the same database
        name race at the file-system and engine level.
    """

    def __init__(
        self,
        engine: SqlEngine | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            engine: Engine adapter. Defaults to OdbcSqlEngine for the
                configured server.
            config: Configuration. Defaults to get_config().
            metrics: Metrics registry. Defaults to the global registry.
        """
        self._config = config or get_config()
        self._engine = engine or OdbcSqlEngine(self._config.server)
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, instance=self._config.server.instance)

    @property
    def engine(self) -> SqlEngine:
        return self._engine

    @property
    def config(self) -> Config:
        return self._config

    def default_base_path(self) -> Path:
        """Return the configured data directory, or ``<exe dir>/Data``."""
        return self._config.storage.data_dir or default_path()

    def files(self, name: str, base_path: str | Path | None = None) -> DatabaseFiles:
        """Return the data and log file paths for a database."""
        return DatabaseFiles.for_database(
            DatabaseName(name),
            base_path if base_path is not None else self.default_base_path(),
        )

    def exists(self, name: str, base_path: str | Path | None = None) -> bool:
        """Return True if the database's data file exists.

        Only the file system is checked: a detached database whose file is
        still on disk reports True.
        """
        return self.files(name, base_path).exists()

    def create(
        self,
        name: str,
        base_path: str | Path | None = None,
        schema: str | None = None,
        if_exists: IfExists | None = None,
    ) -> Path:
        """Create a database and attach it to the engine.

        The base directory is created if missing. When ``schema`` is given
        it is run as a single batch against the new database, without a
        transaction; a failing script leaves whatever the engine applied.

        Args:
            name: Database name.
            base_path: Directory for the files.
            schema: Optional SQL batch to run after creation.
            if_exists: "fail" raises if the data file exists; "replace"
                detaches and deletes the existing database first. Defaults
                to the configured policy.

        Returns:
            Path of the data file.

        Raises:
            InvalidDatabaseNameError: If name fails validation.
            DatabaseExistsError: If the data file exists under "fail".
            DetachError: If "replace" could not detach the existing database.
        """
        db_name = DatabaseName(name)
        files = self.files(name, base_path)
        policy = if_exists or self._config.provisioning.if_exists

        with self._metrics.track("create"):
            if policy == "replace":
                self._replace(db_name, files)
            elif files.exists():
                raise DatabaseExistsError(db_name.value, files.data_file)

            files.base_path.mkdir(parents=True, exist_ok=True)

            with trace_span("localdb.create", {"db.name": db_name.value}):
                with closing(self._engine.connect()) as conn:
                    conn.execute(create_database_sql(db_name, files))

            self._logger.info(
                "database_created",
                name=db_name.value,
                data_file=str(files.data_file),
                log_file=str(files.log_file),
            )

            if schema is not None:
                self._apply_schema(db_name, files, schema)

        return files.data_file

    def _replace(self, name: DatabaseName, files: DatabaseFiles) -> None:
        self._logger.info("database_replacing", name=name.value, data_file=str(files.data_file))
        # The name may be attached from another directory, or attached with
        # its files already gone; detach by name regardless of what is on disk.
        self.detach(name.value).raise_for_failure()
        files.log_file.unlink(missing_ok=True)
        files.data_file.unlink(missing_ok=True)

    def _apply_schema(self, name: DatabaseName, files: DatabaseFiles, schema: str) -> None:
        with trace_span("localdb.apply_schema", {"db.name": name.value}):
            with closing(self._engine.connect(name.value, files.data_file)) as conn:
                cursor = conn.execute(schema)
                # Errors in later statements of a batch surface while
                # advancing through its result sets.
                while cursor.nextset():
                    pass
                cursor.close()
        self._logger.info("schema_applied", name=name.value, length=len(schema))

    def detach(self, name: str) -> DetachResult:
        """Detach a database from the engine.

        Switches to master, forces the database to single-user mode rolling
        back open transactions, then runs sp_detach_db. Engine errors are
        logged and returned in the result, never raised, so detaching an
        already-detached database is harmless.

        Raises:
            InvalidDatabaseNameError: If name fails validation.
        """
        db_name = DatabaseName(name)

        with self._metrics.operation_latency_seconds.labels(operation="detach").time():
            result = self._detach(db_name)

        self._metrics.operations_total.labels(
            operation="detach", status="success" if result.ok else "error"
        ).inc()
        self._metrics.detach_outcomes_total.labels(outcome=result.outcome.value).inc()
        return result

    def _detach(self, name: DatabaseName) -> DetachResult:
        try:
            with trace_span("localdb.detach", {"db.name": name.value}):
                with closing(self._engine.connect()) as conn:
                    row = conn.execute(DATABASE_ID_SQL, name.value).fetchone()
                    if row is None or row[0] is None:
                        self._logger.debug("detach_skipped", name=name.value, reason="not_attached")
                        return DetachResult(name.value, DetachOutcome.NOT_ATTACHED)

                    conn.execute("USE master;")
                    conn.execute(single_user_sql(name))
                    conn.execute(DETACH_SQL, name.value)
        except self._engine.error_types as exc:
            self._logger.warning("detach_failed", name=name.value, error=str(exc))
            return DetachResult(name.value, DetachOutcome.FAILED, exc)

        self._logger.info("database_detached", name=name.value)
        return DetachResult(name.value, DetachOutcome.DETACHED)

    def remove(
        self,
        name: str,
        base_path: str | Path | None = None,
        missing_ok: bool = False,
    ) -> None:
        """Delete the database's log file and data file.

        The database should be detached first. Deleting the files of an
        attached database surfaces as whatever OSError the platform raises.

        Raises:
            FileNotFoundError: If a file is missing and missing_ok is False.
            OSError: If a file cannot be deleted.
        """
        files = self.files(name, base_path)
        with self._metrics.track("remove"):
            first_error: OSError | None = None
            for path in (files.log_file, files.data_file):
                try:
                    path.unlink(missing_ok=missing_ok)
                except OSError as exc:
                    first_error = first_error or exc
            if first_error is not None:
                raise first_error
        self._logger.info("database_removed", name=name, data_file=str(files.data_file))

    def get_connection(self, name: str, base_path: str | Path | None = None) -> EngineConnection:
        """Open a connection to a database, attaching its file if needed.

        The caller owns the returned connection and must close it; an
        unclosed connection keeps the files locked. Prefer connect().

        Raises:
            InvalidDatabaseNameError: If name fails validation.
            DatabaseNotFoundError: If the data file does not exist.
        """
        db_name = DatabaseName(name)
        files = self.files(name, base_path)
        if not files.exists():
            raise DatabaseNotFoundError(db_name.value, files.data_file)

        with self._metrics.track("connect"):
            with trace_span("localdb.connect", {"db.name": db_name.value}):
                conn = self._engine.connect(db_name.value, files.data_file)

        self._metrics.connections_opened_total.inc()
        self._logger.debug("connection_opened", name=db_name.value, data_file=str(files.data_file))
        return conn

    @contextmanager
    def connect(
        self, name: str, base_path: str | Path | None = None
    ) -> Generator[EngineConnection, None, None]:
        """Scoped get_connection(): the connection is closed on exit."""
        conn = self.get_connection(name, base_path)
        try:
            yield conn
        finally:
            conn.close()
