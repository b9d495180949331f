"""Outbound adapters - implementations of outbound ports.

These adapters implement the SqlEngine port against a real SQL Server
(through pyodbc) or an in-memory simulation.
"""

from localdb.adapters.outbound.mock_sql_engine import (
    MockConnection,
    MockCursor,
    MockEngineError,
    MockSqlEngine,
)
from localdb.adapters.outbound.odbc_sql_engine import OdbcSqlEngine, quote_value

__all__ = [
    "MockConnection",
    "MockCursor",
    "MockEngineError",
    "MockSqlEngine",
    "OdbcSqlEngine",
    "quote_value",
]
