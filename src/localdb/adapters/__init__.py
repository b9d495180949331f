"""Adapters layer - concrete implementations of port interfaces.

Outbound adapters implement the SqlEngine port:
- OdbcSqlEngine: SQL Server LocalDB through pyodbc
- MockSqlEngine: in-memory engine for tests
"""

from localdb.adapters.outbound import MockEngineError, MockSqlEngine, OdbcSqlEngine

__all__ = [
    "MockEngineError",
    "MockSqlEngine",
    "OdbcSqlEngine",
]
