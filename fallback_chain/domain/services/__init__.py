"""Domain services package."""

from .chain_builder import AttemptBuilder, ChainDirector
from .chain_executor import BoundChain, ChainExecutor, build_request, execute

__all__ = [
    "AttemptBuilder",
    "BoundChain",
    "ChainDirector",
    "ChainExecutor",
    "build_request",
    "execute"
]
