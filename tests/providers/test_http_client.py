"""Tests for the retrying HTTP helper, all traffic through httpx.MockTransport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from smartskills.exceptions import ProviderError
from smartskills.providers.http_client import USER_AGENT, HttpClient, is_transient_status

URL = "https://example.test/resource"


class _Sequence:
    """Handler returning queued responses and counting calls."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(handler: _Sequence, **kwargs) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler), base_delay=0.0, **kwargs)


class TestTransientStatus:
    """Which statuses are retried."""

    @pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
    def test_transient(self, status: int) -> None:
        assert is_transient_status(status)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    def test_permanent(self, status: int) -> None:
        assert not is_transient_status(status)


class TestSuccess:
    """Happy paths."""

    def test_get_json(self) -> None:
        handler = _Sequence(httpx.Response(200, json={"ok": True}))
        assert asyncio.run(_client(handler).get_json(URL)) == {"ok": True}

    def test_get_bytes_and_headers(self) -> None:
        handler = _Sequence(httpx.Response(200, content=b"\x00\x01"))
        client = _client(handler, headers={"Authorization": "Bearer t"})
        assert asyncio.run(client.get_bytes(URL)) == b"\x00\x01"
        sent = handler.requests[0]
        assert sent.headers["User-Agent"] == USER_AGENT
        assert sent.headers["Authorization"] == "Bearer t"

    def test_query_params_sent(self) -> None:
        handler = _Sequence(httpx.Response(200, text="hi"))
        asyncio.run(_client(handler).get_text(URL, params={"path": "skills/a"}))
        assert handler.requests[0].url.params["path"] == "skills/a"

    def test_invalid_json_raises(self) -> None:
        handler = _Sequence(httpx.Response(200, text="<html>"))
        with pytest.raises(ProviderError, match="Invalid JSON"):
            asyncio.run(_client(handler).get_json(URL))


class TestRetries:
    """Backoff on transient failures."""

    def test_retries_server_error_then_succeeds(self) -> None:
        handler = _Sequence(httpx.Response(503), httpx.Response(429), httpx.Response(200, text="ok"))
        assert asyncio.run(_client(handler).get_text(URL)) == "ok"
        assert len(handler.requests) == 3

    def test_retries_network_error(self) -> None:
        handler = _Sequence(httpx.ConnectError("refused"), httpx.Response(200, text="ok"))
        assert asyncio.run(_client(handler).get_text(URL)) == "ok"

    def test_gives_up_after_max_retries(self) -> None:
        handler = _Sequence(*[httpx.Response(500) for _ in range(3)])
        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(_client(handler, max_retries=2).get_text(URL))
        assert exc_info.value.status_code == 500
        assert len(handler.requests) == 3

    def test_network_error_exhausted(self) -> None:
        handler = _Sequence(httpx.ConnectError("refused"), httpx.ConnectError("refused"))
        with pytest.raises(ProviderError, match="Network error"):
            asyncio.run(_client(handler, max_retries=1).get_text(URL))

    def test_not_found_not_retried(self) -> None:
        handler = _Sequence(httpx.Response(404))
        with pytest.raises(ProviderError, match="Not found") as exc_info:
            asyncio.run(_client(handler).get_text(URL))
        assert exc_info.value.status_code == 404
        assert len(handler.requests) == 1

    def test_auth_failure_message(self) -> None:
        handler = _Sequence(httpx.Response(403))
        with pytest.raises(ProviderError, match="Authentication failed"):
            asyncio.run(_client(handler).get_text(URL))
