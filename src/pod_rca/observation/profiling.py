"""Cryostat client for JFR (Java Flight Recorder) analysis reports."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from pod_rca.auth import TokenProvider

logger = logging.getLogger(__name__)


class CryostatClient:
    """Fetches the automated analysis report Cryostat keeps for a JVM target."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._tokens = token_provider
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            verify=verify,
            transport=transport,
        )

    def get_report(self, target: str) -> str:
        headers = {}
        token = self._tokens.get_token()
        if token:
            headers["Authorization"] = token
        response = self._client.get(f"/api/v1/targets/{quote(target, safe='')}/reports", headers=headers)
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        self._client.close()
