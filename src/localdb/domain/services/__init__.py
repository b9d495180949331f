"""Domain services."""

from localdb.domain.services.path_resolver import (
    DEFAULT_DATA_FOLDER,
    default_path,
    full_path,
    log_path,
)

__all__ = [
    "DEFAULT_DATA_FOLDER",
    "default_path",
    "full_path",
    "log_path",
]
