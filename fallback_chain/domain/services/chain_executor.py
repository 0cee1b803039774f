"""
Chain executor - Domain service walking a fallback chain.

Each attempt runs construct -> send -> classify. A construction failure, a
transport failure or a non-2xx status hands over to the next attempt when one
exists; otherwise the attempt's own outcome is final:

    construction failure  -> (400, RequestConstructionError)
    transport failure     -> (503, TransportError)
    non-2xx status        -> error body decoded into error_target, (status, None)
    2xx status            -> payload decoded into output, (status, None)

Decode failures are never recovered by fallback; they surface as
(observed status, DecodeError).
"""

from __future__ import annotations
import logging
import re
from dataclasses import replace
from typing import Any, List, Optional, Tuple, Union
from urllib.parse import urlsplit

from ..errors import (
    ApplicationStatusError,
    DecodeError,
    DecodingError,
    FallbackError,
    RequestConstructionError,
    TransportError,
)
from ..interfaces.collaborators import Codec, Connecter, Transport
from ..models.attempt import AttemptChain, AttemptNode
from ..models.exchange import OutboundRequest, TransportResponse
from ..models.result import AttemptOutcome, AttemptRecord, ChainResult

CONSTRUCTION_FAILED_STATUS = 400
TRANSPORT_FAILED_STATUS = 503

# RFC 7230 token
_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_CONTROL_OR_SPACE = re.compile(r"[\x00-\x20\x7f]")

_Terminal = Optional[Tuple[int, Optional[FallbackError]]]


def default_codec() -> Codec:
    """JSON codec used when no codec is supplied."""
    from ...infrastructure.codec.json_codec import JsonCodec
    return JsonCodec()


def build_request(node: AttemptNode) -> OutboundRequest:
    """Construct the physical request for an attempt.

    Raises RequestConstructionError for an invalid method, target or header.
    """
    method = node.method or "GET"
    if not _TOKEN.match(method):
        raise RequestConstructionError(f"invalid method {method!r}")

    target = node.target or ""
    if _CONTROL_OR_SPACE.search(target):
        raise RequestConstructionError(f"invalid target {target!r}: contains whitespace or control characters")
    try:
        parts = urlsplit(target)
        parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise RequestConstructionError(f"invalid target {target!r}: {exc}") from exc
    if not parts.scheme:
        raise RequestConstructionError(f"invalid target {target!r}: missing scheme")
    if not parts.hostname:
        raise RequestConstructionError(f"invalid target {target!r}: missing host")

    for name, value in node.headers.items():
        if not _TOKEN.match(str(name)):
            raise RequestConstructionError(f"invalid header name {name!r}")
        value = str(value)
        if "\r" in value or "\n" in value:
            raise RequestConstructionError(f"invalid value for header {name!r}")
        try:
            value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise RequestConstructionError(f"invalid value for header {name!r}: {exc}") from exc

    return OutboundRequest(method=method, target=target, body=node.body, headers=node.headers)


class ChainExecutor:
    """Executes attempt chains against an explicitly supplied transport."""

    def __init__(
        self,
        transport: Transport,
        codec: Optional[Codec] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._transport = transport
        self._codec = codec or default_codec()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def transport(self) -> Transport:
        return self._transport

    def execute(self, chain: Union[AttemptChain, AttemptNode, Connecter]) -> ChainResult:
        """Walk the chain until an attempt produces a final outcome.

        Accepts a prepared AttemptChain or a head node, which is flattened first
        (raising ChainConfigurationError on a fallback cycle).
        """
        if not isinstance(chain, AttemptChain):
            chain = AttemptChain.from_head(chain)

        records: List[AttemptRecord] = []
        for node in chain:
            record, terminal = self._attempt(node)
            records.append(record)
            if terminal is not None:
                status_code, error = terminal
                return ChainResult(status_code, error, served_by=node.name, attempts=tuple(records))
            self._logger.debug(f"Attempt '{node.name}' failed ({record.outcome.value}), falling back")

        return self._delegate(chain.tail, records)

    def bind(self, head: Union[AttemptChain, AttemptNode, Connecter], name: Optional[str] = None) -> BoundChain:
        """Close over this executor so the chain can run with no arguments."""
        return BoundChain(self, head, name=name)

    def _attempt(self, node: AttemptNode) -> Tuple[AttemptRecord, _Terminal]:
        try:
            request = build_request(node)
        except RequestConstructionError as exc:
            return self._fail(node, AttemptOutcome.CONSTRUCTION_FAILED, exc, CONSTRUCTION_FAILED_STATUS)

        try:
            response = self._transport.send(request.method, request.target, request.body, request.headers)
        except TransportError as exc:
            return self._fail(node, AttemptOutcome.TRANSPORT_FAILED, exc, TRANSPORT_FAILED_STATUS)

        if response.is_success:
            return self._decode(node, response, node.output, AttemptOutcome.SUCCEEDED)

        self._notify(node, f"{node.name} returned HTTP Error: {response.status_code}")
        if not node.is_terminal:
            error = ApplicationStatusError(response.status_code)
            return AttemptRecord(node.name, AttemptOutcome.STATUS_REJECTED, response.status_code, error), None
        return self._decode(node, response, node.error_target, AttemptOutcome.ERROR_DECODED)

    def _fail(
        self,
        node: AttemptNode,
        outcome: AttemptOutcome,
        error: FallbackError,
        terminal_status: int
    ) -> Tuple[AttemptRecord, _Terminal]:
        self._notify(node, f"{node.name} failed: {error}")
        if not node.is_terminal:
            return AttemptRecord(node.name, outcome, None, error), None
        return AttemptRecord(node.name, outcome, terminal_status, error), (terminal_status, error)

    def _decode(
        self,
        node: AttemptNode,
        response: TransportResponse,
        target: Any,
        outcome: AttemptOutcome
    ) -> Tuple[AttemptRecord, _Terminal]:
        status_code = response.status_code
        try:
            self._codec.decode(response.payload, target)
        except DecodingError as exc:
            error = DecodeError(f"Unable to parse response body of '{node.name}' (HTTP {status_code}): {exc}")
            error.__cause__ = exc
            self._notify(node, f"{node.name} failed: {error}")
            return AttemptRecord(node.name, AttemptOutcome.DECODE_FAILED, status_code, error), (status_code, error)
        return AttemptRecord(node.name, outcome, status_code), (status_code, None)

    def _delegate(self, tail: Connecter, records: List[AttemptRecord]) -> ChainResult:
        name = getattr(tail, 'name', None) or type(tail).__name__
        result = tail.execute()
        if not isinstance(result, ChainResult):
            status_code, error = result
            result = ChainResult(status_code, error)
        if result.served_by is None:
            result = replace(result, served_by=name)
        records.append(AttemptRecord(name, AttemptOutcome.DELEGATED, result.status_code, result.error))
        return result.with_attempts(tuple(records))

    def _notify(self, node: AttemptNode, message: str) -> None:
        self._logger.debug(message)
        if node.logger is not None:
            node.logger.log(message)


class BoundChain:
    """A chain closed over its executor; satisfies Connecter."""

    def __init__(
        self,
        executor: ChainExecutor,
        head: Union[AttemptChain, AttemptNode, Connecter],
        name: Optional[str] = None
    ):
        self._executor = executor
        self._chain = head if isinstance(head, AttemptChain) else AttemptChain.from_head(head)
        self.name = name or getattr(self._chain.head, 'name', None) or type(self._chain.head).__name__

    @property
    def chain(self) -> AttemptChain:
        return self._chain

    def execute(self) -> ChainResult:
        return self._executor.execute(self._chain)


def execute(
    head: Union[AttemptChain, AttemptNode, Connecter],
    transport: Transport,
    codec: Optional[Codec] = None
) -> ChainResult:
    """Execute a chain once with a throwaway executor."""
    return ChainExecutor(transport, codec).execute(head)
