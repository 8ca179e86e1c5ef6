"""Prometheus HTTP API client and scalar extraction from query results."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pod_rca.auth import TokenProvider

logger = logging.getLogger(__name__)

QUERY_PATH = "/api/v1/query"


def extract_value(result: Any) -> float:
    """Return the latest sample of the first series in a query result, or 0.0.

    Handles both instant vectors (``value``) and range matrices (``values``).
    Malformed payloads are logged and treated as empty.
    """
    try:
        series = ((result or {}).get("data") or {}).get("result") or []
        if series:
            first = series[0]
            sample = first["value"] if "value" in first else first["values"][-1]
            return float(sample[1])
    except (AttributeError, IndexError, KeyError, TypeError, ValueError):
        logger.warning("Could not extract value from Prometheus response", exc_info=True)
    return 0.0


class PrometheusClient:
    """Runs PromQL instant queries against ``/api/v1/query``."""

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

    def query(self, expr: str) -> dict[str, Any]:
        """Execute a PromQL query and return the decoded JSON response."""
        headers = {}
        token = self._tokens.get_token()
        if token:
            headers["Authorization"] = token
        logger.debug("PromQL: %s", expr)
        response = self._client.get(QUERY_PATH, params={"query": expr}, headers=headers)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self._client.close()
