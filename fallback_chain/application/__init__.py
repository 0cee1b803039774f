"""Application layer - use cases over the chain engine."""

from .chain_loader import (
    AttemptDefinition,
    ChainDefinition,
    build_chain,
    load_chain_definition,
    parse_chain_definition
)
from .chain_service import ChainRun, ChainService

__all__ = [
    "AttemptDefinition",
    "ChainDefinition",
    "ChainRun",
    "ChainService",
    "build_chain",
    "load_chain_definition",
    "parse_chain_definition"
]
