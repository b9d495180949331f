"""
LocalDB Provisioner - SQL Server LocalDB database lifecycle helpers

Creates, attaches, detaches and removes LocalDB database files on disk and
hands out connections to them. All storage work is done by the engine.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from localdb.application import LocalDB
from localdb.domain.services.path_resolver import default_path, full_path, log_path
from localdb.ports.inbound import (
    DatabaseExistsError,
    DatabaseNotFoundError,
    DetachError,
    InvalidDatabaseNameError,
    LocalDBError,
)

__all__ = [
    "LocalDB",
    "default_path",
    "full_path",
    "log_path",
    "LocalDBError",
    "DatabaseExistsError",
    "DatabaseNotFoundError",
    "DetachError",
    "InvalidDatabaseNameError",
]
