"""
Chain service - Application layer wiring settings, transport, codec and
executor together for running chain definitions.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..domain.interfaces.collaborators import Codec, EventLogger, Transport
from ..domain.models.exchange import is_success_status
from ..domain.models.result import ChainResult
from ..domain.services.chain_executor import ChainExecutor
from ..infrastructure.codec.json_codec import JsonCodec
from ..infrastructure.config.settings import AppSettings, get_settings
from ..infrastructure.http import create_transport
from .chain_loader import ChainDefinition, build_chain, load_chain_definition


@dataclass
class ChainRun:
    """Result of running a definition, with the decoded bodies."""
    result: ChainResult
    output: Dict[str, Any] = field(default_factory=dict)
    error_body: Dict[str, Any] = field(default_factory=dict)

    @property
    def body(self) -> Dict[str, Any]:
        """The decoded body that belongs to the final status."""
        return self.output if is_success_status(self.result.status_code) else self.error_body


class ChainService:
    """Runs chain definitions against one configured transport."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        transport: Optional[Transport] = None,
        codec: Optional[Codec] = None,
        event_logger: Optional[EventLogger] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._settings = settings or get_settings()
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else create_transport(self._settings.transport)
        self._codec = codec or JsonCodec()
        self._event_logger = event_logger
        self._logger = logger or logging.getLogger(__name__)
        self.executor = ChainExecutor(self._transport, self._codec)

    def run_definition(self, definition: ChainDefinition) -> ChainRun:
        output: Dict[str, Any] = {}
        error_body: Dict[str, Any] = {}
        chain = build_chain(
            definition,
            output=output,
            error_target=error_body,
            logger=self._event_logger,
            codec=self._codec,
        )
        self._logger.info(f"Executing chain: {' -> '.join(chain.names)}")
        run = ChainRun(self.executor.execute(chain), output, error_body)
        self._logger.info(
            f"Chain finished with HTTP {run.result.status_code} (served by {run.result.served_by})"
        )
        return run

    def run_file(self, path: Union[str, Path]) -> ChainRun:
        return self.run_definition(load_chain_definition(path))

    def close(self) -> None:
        if self._owns_transport and hasattr(self._transport, 'close'):
            self._transport.close()

    def __enter__(self) -> ChainService:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
