"""
Builder and director for attempt nodes.

AttemptBuilder collects the scattered configuration of one attempt;
ChainDirector drives it through its construction steps in a fixed order and
wires finished attempts into chains.
"""

from __future__ import annotations
import logging
from copy import copy
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..errors import BodyEncodingError, ChainConfigurationError, EncodingError
from ..interfaces.collaborators import Codec, Connecter, EventLogger
from ..models.attempt import AttemptChain, AttemptNode
from .chain_executor import default_codec

JSON_CONTENT_TYPE = {"Content-Type": "application/json"}

logger = logging.getLogger(__name__)


class AttemptBuilder:
    """Builder-pattern means of constructing AttemptNode instances.

    The finished node is available as `attempt` once a director has run.
    """

    def __init__(
        self,
        name: str,
        method: str,
        target: str,
        returns_json: bool = False,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        output: Any = None,
        error_target: Any = None,
        fallback: Optional[Union[AttemptNode, Connecter]] = None,
        logger: Optional[EventLogger] = None,
        codec: Optional[Codec] = None
    ):
        self.name = name
        self.method = method
        self.target = target
        self.returns_json = returns_json
        self.body = body
        self.headers = headers
        self.output = output
        self.error_target = error_target
        self.fallback = fallback
        self.logger = logger
        self._codec = codec

        self.attempt: Optional[AttemptNode] = None

    @property
    def codec(self) -> Codec:
        if self._codec is None:
            self._codec = default_codec()
        return self._codec

    def create_attempt(self) -> None:
        self.attempt = AttemptNode(name=self.name, method=self.method, target=self.target)

    def add_body(self) -> None:
        """Encode the body through the codec. Raises BodyEncodingError."""
        try:
            encoded = self.codec.encode(self.body)
        except EncodingError as exc:
            self.attempt = None
            raise BodyEncodingError(f"Unable to encode body of '{self.name}': {exc}") from exc
        self.attempt = replace(self._require_attempt(), body=encoded)

    def add_headers(self) -> None:
        """Explicit headers replace the JSON default entirely; they are never merged."""
        headers: Dict[str, str] = {}
        if self.headers:
            headers = dict(self.headers)
        elif self.returns_json:
            headers = dict(JSON_CONTENT_TYPE)
        self.attempt = replace(self._require_attempt(), headers=headers)

    def add_payloads(self) -> None:
        self.attempt = replace(
            self._require_attempt(),
            output=self.output,
            error_target=self.error_target,
            logger=self.logger,
        )

    def add_fallback(self) -> None:
        self.attempt = replace(self._require_attempt(), fallback=self.fallback)

    def _require_attempt(self) -> AttemptNode:
        if self.attempt is None:
            raise ChainConfigurationError(f"create_attempt() must run before configuring '{self.name}'")
        return self.attempt


class ChainDirector:
    """Director that runs AttemptBuilder steps in order."""

    def create_attempt(self, builder: AttemptBuilder) -> AttemptNode:
        """Build one attempt: create, body, headers, payloads, fallback."""
        builder.create_attempt()

        if builder.body is not None:
            builder.add_body()

        builder.add_headers()
        builder.add_payloads()

        if builder.fallback is not None:
            builder.add_fallback()

        logger.debug(f"Built attempt '{builder.name}' ({builder.method} {builder.target})")
        return builder.attempt

    def create_chain(self, builders: Sequence[AttemptBuilder]) -> AttemptChain:
        """Build attempts in fallback order, each falling back to the one after it.

        Only the last builder may keep its own fallback; every other builder's
        fallback is replaced by its successor.
        """
        if not builders:
            raise ChainConfigurationError("A chain needs at least one attempt")

        nodes: List[AttemptNode] = []
        following: Optional[Union[AttemptNode, Connecter]] = builders[-1].fallback
        for builder in reversed(builders):
            if builder.fallback is not None and builder.fallback is not following:
                logger.warning(f"Ignoring fallback of '{builder.name}': it falls back to the next attempt in the chain")
            staged = copy(builder)
            staged.fallback = following
            following = self.create_attempt(staged)
            builder.attempt = following
            nodes.append(following)
        nodes.reverse()

        chain = AttemptChain.from_head(nodes[0])
        logger.debug(f"Built chain: {' -> '.join(chain.names)}")
        return chain
