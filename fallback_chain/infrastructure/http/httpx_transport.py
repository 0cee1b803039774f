"""
httpx transport - Infrastructure adapter performing exchanges over a pooled
httpx.Client.
"""

from __future__ import annotations
import logging
from typing import Mapping, Optional

import httpx

from ...domain.errors import TransportError
from ...domain.models.exchange import TransportResponse
from ..config.settings import TransportSettings


def _httpx_client(settings: TransportSettings) -> httpx.Client:
    timeout = httpx.Timeout(settings.read_timeout_s, connect=settings.connect_timeout_s)
    return httpx.Client(
        timeout=timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=settings.follow_redirects,
        verify=settings.verify_tls,
    )


class HttpxTransport:
    """Transport backed by httpx."""

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._settings = settings or TransportSettings()
        self._owns_client = client is None
        self._client = client if client is not None else _httpx_client(self._settings)
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
            resp = self._client.request(method, target, content=body, headers=dict(headers or {}))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{method} {target}: {e}") from e

        self._logger.debug(f"{method} {target} -> {resp.status_code} ({len(resp.content)} bytes)")
        return TransportResponse(resp.status_code, resp.content, dict(resp.headers))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
