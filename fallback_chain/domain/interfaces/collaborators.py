"""
Collaborator protocol interfaces.
Defines the contracts the chain engine consumes and exposes.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from ..models.exchange import TransportResponse
from ..models.result import ChainResult


class Transport(Protocol):
    """Protocol for transports performing the actual exchange."""

    def send(
        self,
        method: str,
        target: str,
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        """Perform the exchange. Raises TransportError when no usable response is obtained."""
        ...


class Codec(Protocol):
    """Protocol for request body serialization and response payload decoding."""

    def encode(self, value: Any) -> bytes:
        """Serialize a value. Raises EncodingError."""
        ...

    def decode(self, payload: bytes, target: Any) -> None:
        """Fill target from payload. Raises DecodingError."""
        ...


class EventLogger(Protocol):
    """Fire-and-forget sink notified of attempt failures."""

    def log(self, message: str) -> None:
        ...


@runtime_checkable
class Connecter(Protocol):
    """Anything that can take part in a chain: executes with no arguments.

    execute() returns a ChainResult or a plain (status_code, error) pair.
    """

    def execute(self) -> Union[ChainResult, Tuple[int, Optional[Exception]]]:
        ...
