"""
fallback-chain - ordered fallback chains for outbound requests.
"""

__version__ = "1.0.0"

from .domain import (
    ApplicationStatusError,
    AttemptChain,
    AttemptNode,
    AttemptOutcome,
    AttemptRecord,
    BodyEncodingError,
    ChainConfigurationError,
    ChainResult,
    DecodeError,
    FallbackError,
    RequestConstructionError,
    TransportError,
    TransportResponse
)
from .domain.services import AttemptBuilder, BoundChain, ChainDirector, ChainExecutor, execute

__all__ = [
    "ApplicationStatusError",
    "AttemptBuilder",
    "AttemptChain",
    "AttemptNode",
    "AttemptOutcome",
    "AttemptRecord",
    "BodyEncodingError",
    "BoundChain",
    "ChainConfigurationError",
    "ChainDirector",
    "ChainExecutor",
    "ChainResult",
    "DecodeError",
    "FallbackError",
    "RequestConstructionError",
    "TransportError",
    "TransportResponse",
    "execute"
]
