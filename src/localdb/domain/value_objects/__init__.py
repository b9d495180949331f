"""Value objects for database identity and operation results."""

from localdb.domain.value_objects.detach_result import DetachOutcome, DetachResult
from localdb.domain.value_objects.identifiers import (
    DATA_FILE_EXTENSION,
    LOG_FILE_SUFFIX,
    MAX_NAME_LENGTH,
    DatabaseFiles,
    DatabaseName,
)

__all__ = [
    "DATA_FILE_EXTENSION",
    "LOG_FILE_SUFFIX",
    "MAX_NAME_LENGTH",
    "DatabaseFiles",
    "DatabaseName",
    "DetachOutcome",
    "DetachResult",
]
