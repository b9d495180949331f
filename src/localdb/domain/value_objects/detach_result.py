"""Outcome of a detach request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from localdb.domain.errors import DetachError


class DetachOutcome(Enum):
    """What happened when a detach was requested."""

    DETACHED = "detached"
    NOT_ATTACHED = "not_attached"
    FAILED = "failed"


@dataclass(frozen=True)
class DetachResult:
    """Result of detaching a database from the engine.

    Detach never raises on engine errors; the error is carried here so
    callers that care can inspect or re-raise it, and cleanup code that
    doesn't care can ignore it.

    Attributes:
        name: Database name the detach was issued for.
        outcome: DETACHED, NOT_ATTACHED or FAILED.
        error: The engine error when outcome is FAILED.
    """

    name: str
    outcome: DetachOutcome
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """True unless the engine rejected the detach."""
        return self.outcome is not DetachOutcome.FAILED

    @property
    def detached(self) -> bool:
        return self.outcome is DetachOutcome.DETACHED

    def raise_for_failure(self) -> None:
        """Raise DetachError if the detach failed.

        Raises:
            DetachError: If outcome is FAILED. The engine error is chained.
        """
        if self.outcome is DetachOutcome.FAILED:
            raise DetachError(f"Failed to detach database '{self.name}': {self.error}") from self.error
