"""HTTP transport adapters."""

from .httpx_transport import HttpxTransport
from .requests_transport import RequestsTransport

__all__ = ['HttpxTransport', 'RequestsTransport', 'create_transport']


def create_transport(settings=None):
    """Build the transport selected by settings.backend."""
    from ..config.settings import TransportSettings
    settings = settings or TransportSettings()
    if settings.backend == 'httpx':
        return HttpxTransport(settings)
    return RequestsTransport(settings)
