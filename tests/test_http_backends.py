"""Tests for the Prometheus and Cryostat HTTP clients."""

from __future__ import annotations

import httpx
import pytest

from pod_rca.auth import TokenProvider
from pod_rca.observation.profiling import CryostatClient
from pod_rca.observation.prometheus import PrometheusClient, extract_value


@pytest.fixture
def tokens(tmp_path) -> TokenProvider:
    path = tmp_path / "token"
    path.write_text("abc123\n")
    return TokenProvider(path)


class TestPrometheusClient:
    def test_query_sends_expr_and_token(self, tokens) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"status": "success", "data": {"resultType": "vector", "result": [{"value": [1, "7"]}]}},
            )

        client = PrometheusClient("http://prom:9090/", tokens, transport=httpx.MockTransport(handler))
        result = client.query('sum(up{job="api"})')

        assert extract_value(result) == 7.0
        assert seen[0].url.path == "/api/v1/query"
        assert seen[0].url.params["query"] == 'sum(up{job="api"})'
        assert seen[0].headers["Authorization"] == "Bearer abc123"

    def test_no_auth_header_without_token(self, tmp_path) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"result": []}})

        client = PrometheusClient(
            "http://prom:9090",
            TokenProvider(tmp_path / "missing"),
            transport=httpx.MockTransport(handler),
        )
        client.query("up")
        assert "Authorization" not in seen[0].headers

    def test_http_error_raises(self, tokens) -> None:
        client = PrometheusClient(
            "http://prom:9090",
            tokens,
            transport=httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable")),
        )
        with pytest.raises(httpx.HTTPStatusError):
            client.query("up")


class TestCryostatClient:
    def test_get_report(self, tokens) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="Allocation pressure: high")

        client = CryostatClient("https://cryostat:8181", tokens, transport=httpx.MockTransport(handler))
        assert client.get_report("web-1") == "Allocation pressure: high"
        assert seen[0].url.path == "/api/v1/targets/web-1/reports"
        assert seen[0].headers["Authorization"] == "Bearer abc123"

    def test_target_is_path_escaped(self, tokens) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="")

        client = CryostatClient("https://cryostat:8181", tokens, transport=httpx.MockTransport(handler))
        client.get_report("service:jmx:rmi:///jndi/rmi://web-1:9091/jmxrmi")
        assert "/jndi/" not in seen[0].url.raw_path.decode()
