"""
Domain models for a single request/response exchange.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

SUCCESS_MIN = 200
SUCCESS_MAX = 299


def is_success_status(status_code: int) -> bool:
    """Return True for statuses in the inclusive 2xx range."""
    return SUCCESS_MIN <= status_code <= SUCCESS_MAX


@dataclass(frozen=True)
class OutboundRequest:
    """A fully constructed request, ready to hand to a transport."""
    method: str
    target: str
    body: Optional[bytes] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))


@dataclass(frozen=True)
class TransportResponse:
    """What a transport hands back: status code, raw payload and headers."""
    status_code: int
    payload: bytes = b''
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return is_success_status(self.status_code)
