"""Domain interfaces package - Protocols for the engine's ports."""

from .collaborators import Codec, Connecter, EventLogger, Transport

__all__ = [
    "Codec",
    "Connecter",
    "EventLogger",
    "Transport"
]
