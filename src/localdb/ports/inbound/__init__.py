"""Inbound ports - APIs offered to callers.

The provisioner API and the errors it raises.
"""

from localdb.domain.errors import (
    DatabaseExistsError,
    DatabaseNotFoundError,
    DetachError,
    InvalidDatabaseNameError,
    LocalDBError,
)
from localdb.ports.inbound.provisioner import DatabaseProvisioner, IfExists

__all__ = [
    "DatabaseProvisioner",
    "IfExists",
    "LocalDBError",
    "DatabaseExistsError",
    "DatabaseNotFoundError",
    "DetachError",
    "InvalidDatabaseNameError",
]
