"""
Domain models for attempt nodes and the chains they form.
Pure data; executing a chain is the job of the chain executor.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional, Tuple, Union

from ..errors import ChainConfigurationError

if TYPE_CHECKING:
    from ..interfaces.collaborators import Connecter, EventLogger


@dataclass(frozen=True, eq=False)
class AttemptNode:
    """One candidate request plus a reference to the attempt tried after it fails.

    name: diagnostic label, never used for control flow
    method: request method (GET, POST, ...)
    target: absolute URI
    body: already-encoded request body, or None
    headers: request headers; case handling is left to the transport
    output: caller-owned object successful payloads are decoded into
    error_target: caller-owned object decoded into on a terminal non-2xx response
    fallback: next attempt (an AttemptNode or any Connecter). Shared, not owned.
    logger: optional sink notified of every failure on this attempt

    Nodes compare by identity so that one node can be the tail of several chains.
    """
    name: str
    method: str
    target: str
    body: Optional[bytes] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    output: Any = None
    error_target: Any = None
    fallback: Optional[Union[AttemptNode, Connecter]] = None
    logger: Optional[EventLogger] = None

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers or {})))

    @property
    def is_terminal(self) -> bool:
        return self.fallback is None

    def with_fallback(self, fallback: Optional[Union[AttemptNode, Connecter]]) -> AttemptNode:
        """Return a copy of this node pointing at a different fallback."""
        return replace(self, fallback=fallback)

    def __repr__(self) -> str:
        nxt = getattr(self.fallback, 'name', type(self.fallback).__name__) if self.fallback else None
        return f"AttemptNode(name={self.name!r}, method={self.method!r}, target={self.target!r}, fallback={nxt!r})"


@dataclass(frozen=True)
class AttemptChain:
    """An explicit, finite, ordered sequence of attempts.

    nodes[i].fallback must be nodes[i + 1]; the last node's fallback must be
    `tail`, an optional opaque Connecter executed verbatim when reached.
    """
    nodes: Tuple[AttemptNode, ...]
    tail: Optional[Connecter] = None

    def __post_init__(self):
        nodes = tuple(self.nodes)
        object.__setattr__(self, 'nodes', nodes)
        if not nodes and self.tail is None:
            raise ChainConfigurationError("A chain needs at least one attempt")
        if len({id(node) for node in nodes}) != len(nodes):
            raise ChainConfigurationError("A chain may not visit the same attempt twice")
        for current, following in zip(nodes, nodes[1:] + (self.tail,)):
            if current.fallback is not following:
                raise ChainConfigurationError(
                    f"Attempt '{current.name}' does not fall back to the next element of the chain"
                )

    @classmethod
    def from_head(cls, head: Union[AttemptNode, Connecter]) -> AttemptChain:
        """Flatten the fallback links reachable from head, rejecting cycles."""
        nodes = []
        seen = set()
        current = head
        while isinstance(current, AttemptNode):
            if id(current) in seen:
                raise ChainConfigurationError(f"Fallback cycle detected at attempt '{current.name}'")
            seen.add(id(current))
            nodes.append(current)
            current = current.fallback
        return cls(tuple(nodes), tail=current)

    @property
    def head(self) -> Union[AttemptNode, Connecter]:
        return self.nodes[0] if self.nodes else self.tail

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(node.name for node in self.nodes)

    def __iter__(self) -> Iterator[AttemptNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)
