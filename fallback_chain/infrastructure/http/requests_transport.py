"""
requests transport - Infrastructure adapter performing exchanges over a
pooled requests.Session.
"""

from __future__ import annotations
import logging
from typing import Mapping, Optional

import requests

from ...domain.errors import TransportError
from ...domain.models.exchange import TransportResponse
from ..config.settings import TransportSettings


class RequestsTransport:
    """Transport backed by requests. Timeouts and TLS come from settings."""

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._settings = settings or TransportSettings()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        if self._owns_session:
            self._session.headers['User-Agent'] = self._settings.user_agent
        self._logger = logger or logging.getLogger(__name__)

    def send(
        self,
        method: str,
        target: str,
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        self._logger.debug(f"{method} {target}")
        try:
            resp = self._session.request(
                method=method,
                url=target,
                data=body,
                headers=dict(headers or {}),
                timeout=(self._settings.connect_timeout_s, self._settings.read_timeout_s),
                allow_redirects=self._settings.follow_redirects,
                verify=self._settings.verify_tls,
            )
            try:
                payload = resp.content
            finally:
                resp.close()
        except requests.RequestException as e:
            raise TransportError(f"{method} {target}: {e}") from e

        self._logger.debug(f"{method} {target} -> {resp.status_code} ({len(payload)} bytes)")
        return TransportResponse(resp.status_code, payload or b'', dict(resp.headers))

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
