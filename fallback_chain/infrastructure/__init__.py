"""Infrastructure layer - transports, codec, configuration and logging adapters."""

from .codec import JsonCodec
from .http import HttpxTransport, RequestsTransport, create_transport
from .logging_sink import FanOutEventSink, LoggingEventSink, MemoryEventSink

__all__ = [
    "FanOutEventSink",
    "HttpxTransport",
    "JsonCodec",
    "LoggingEventSink",
    "MemoryEventSink",
    "RequestsTransport",
    "create_transport"
]
