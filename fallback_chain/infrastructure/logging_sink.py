"""
Logging sink - adapts a stdlib logger to the EventLogger protocol attempts report to.
"""

from __future__ import annotations
import logging
from typing import List, Optional


class LoggingEventSink:
    """Publishes attempt failure events through a logging.Logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.WARNING):
        self._logger = logger or logging.getLogger('fallback_chain.events')
        self._level = level

    def log(self, message: str) -> None:
        self._logger.log(self._level, message)


class MemoryEventSink:
    """Keeps events in memory, e.g. to print them after a CLI run."""

    def __init__(self):
        self.messages: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)


class FanOutEventSink:
    """Forwards every event to several sinks."""

    def __init__(self, *sinks):
        self._sinks = [s for s in sinks if s is not None]

    def log(self, message: str) -> None:
        for sink in self._sinks:
            sink.log(message)
