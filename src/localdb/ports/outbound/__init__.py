"""Outbound ports - interfaces for external dependencies.

The provisioner depends on a single external system, the SQL Server
engine, reached through the SqlEngine port.
"""

from localdb.ports.outbound.sql_engine import EngineConnection, EngineCursor, SqlEngine

__all__ = [
    "EngineConnection",
    "EngineCursor",
    "SqlEngine",
]
