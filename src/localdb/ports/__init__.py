"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (DatabaseProvisioner)
- Outbound ports: Dependencies on external systems (SqlEngine)

Adapters implement these ports with concrete functionality.
"""

from localdb.ports.inbound import (
    DatabaseExistsError,
    DatabaseNotFoundError,
    DatabaseProvisioner,
    DetachError,
    IfExists,
    InvalidDatabaseNameError,
    LocalDBError,
)
from localdb.ports.outbound import EngineConnection, EngineCursor, SqlEngine

__all__ = [
    # Inbound ports
    "DatabaseProvisioner",
    "IfExists",
    "LocalDBError",
    "DatabaseExistsError",
    "DatabaseNotFoundError",
    "DetachError",
    "InvalidDatabaseNameError",
    # Outbound ports
    "EngineConnection",
    "EngineCursor",
    "SqlEngine",
]
