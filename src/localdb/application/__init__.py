"""Application layer for the LocalDB provisioner.

Exports:
    - LocalDB: provisioning facade (create, detach, remove, connect)
    - create_database_sql, single_user_sql: DDL builders
"""

from localdb.application.local_db import (
    DATABASE_ID_SQL,
    DETACH_SQL,
    LocalDB,
    create_database_sql,
    single_user_sql,
)

__all__ = [
    "LocalDB",
    "DATABASE_ID_SQL",
    "DETACH_SQL",
    "create_database_sql",
    "single_user_sql",
]
