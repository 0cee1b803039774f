"""Domain layer - attempt models, error taxonomy and the chain engine."""

from .errors import (
    ApplicationStatusError,
    BodyEncodingError,
    ChainConfigurationError,
    CodecError,
    DecodeError,
    DecodingError,
    EncodingError,
    FallbackError,
    RequestConstructionError,
    TransportError
)
from .models import (
    AttemptChain,
    AttemptNode,
    AttemptOutcome,
    AttemptRecord,
    ChainResult,
    OutboundRequest,
    TransportResponse
)

__all__ = [
    "ApplicationStatusError",
    "AttemptChain",
    "AttemptNode",
    "AttemptOutcome",
    "AttemptRecord",
    "BodyEncodingError",
    "ChainConfigurationError",
    "ChainResult",
    "CodecError",
    "DecodeError",
    "DecodingError",
    "EncodingError",
    "FallbackError",
    "OutboundRequest",
    "RequestConstructionError",
    "TransportError",
    "TransportResponse"
]
