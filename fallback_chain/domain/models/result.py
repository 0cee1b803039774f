"""
Domain models describing the outcome of a chain walk.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..errors import FallbackError
from .exchange import is_success_status


class AttemptOutcome(Enum):
    """How a single visited attempt ended."""
    SUCCEEDED = "succeeded"
    CONSTRUCTION_FAILED = "construction_failed"
    TRANSPORT_FAILED = "transport_failed"
    STATUS_REJECTED = "status_rejected"
    DECODE_FAILED = "decode_failed"
    ERROR_DECODED = "error_decoded"
    DELEGATED = "delegated"

    @property
    def falls_back(self) -> bool:
        """Outcomes that hand over to the next attempt when one exists."""
        return self in (
            AttemptOutcome.CONSTRUCTION_FAILED,
            AttemptOutcome.TRANSPORT_FAILED,
            AttemptOutcome.STATUS_REJECTED,
        )


@dataclass(frozen=True)
class AttemptRecord:
    """Diagnostic record of one visited attempt."""
    name: str
    outcome: AttemptOutcome
    status_code: Optional[int] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class ChainResult:
    """Final (status_code, error) pair of a chain walk plus its audit trail."""
    status_code: int
    error: Optional[FallbackError] = None
    served_by: Optional[str] = None
    attempts: Tuple[AttemptRecord, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None and is_success_status(self.status_code)

    def as_tuple(self) -> Tuple[int, Optional[FallbackError]]:
        return self.status_code, self.error

    def with_attempts(self, earlier: Tuple[AttemptRecord, ...]) -> ChainResult:
        """Prefix records of attempts visited before this result was produced."""
        return ChainResult(
            status_code=self.status_code,
            error=self.error,
            served_by=self.served_by,
            attempts=tuple(earlier) + tuple(self.attempts),
        )
