"""Domain models package."""

from .attempt import AttemptChain, AttemptNode
from .exchange import OutboundRequest, TransportResponse, is_success_status
from .result import AttemptOutcome, AttemptRecord, ChainResult

__all__ = [
    "AttemptChain",
    "AttemptNode",
    "AttemptOutcome",
    "AttemptRecord",
    "ChainResult",
    "OutboundRequest",
    "TransportResponse",
    "is_success_status"
]
