"""
Error taxonomy for fallback chains.
Every failure the engine can observe maps onto exactly one of these types.
"""

from __future__ import annotations
from typing import Optional


class FallbackError(Exception):
    """Base class for all fallback chain errors."""


class RequestConstructionError(FallbackError):
    """The method/target combination is invalid; nothing was sent."""


class TransportError(FallbackError):
    """The request was handed to the transport but no usable response came back."""


class ApplicationStatusError(FallbackError):
    """A response was obtained but its status falls outside the success range."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP status {status_code}")


class DecodeError(FallbackError):
    """A conclusive response payload could not be parsed into its target."""


class BodyEncodingError(FallbackError):
    """A request body could not be serialized while building an attempt."""


class ChainConfigurationError(FallbackError):
    """The chain itself is malformed (cyclic, empty or invalid definition)."""


class CodecError(Exception):
    """Base class for codec collaborator failures."""


class EncodingError(CodecError):
    """Value could not be serialized."""


class DecodingError(CodecError):
    """Payload could not be deserialized into the requested target."""
