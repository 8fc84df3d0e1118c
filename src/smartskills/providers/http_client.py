"""Shared async HTTP helper for source providers.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and retries. Retry and backoff live here, in
the fetcher, so the installer never retries on its own.

Transient failures (connection errors, timeouts, HTTP 408, 429 and 5xx) are
retried with exponential backoff plus up to 30% jitter. Everything else, and
transient failures that exhaust the retry budget, raise ``ProviderError``.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

import httpx

from smartskills.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Timeout for all provider HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "SmartSkills/0.1"

DEFAULT_MAX_RETRIES: int = 3
DEFAULT_BASE_DELAY: float = 1.0

_TRANSIENT_STATUS = frozenset({408, 429})


def is_transient_status(status_code: int) -> bool:
    """Return True for HTTP statuses worth retrying."""
    return status_code >= 500 or status_code in _TRANSIENT_STATUS


class HttpClient:
    """Retrying GET helper shared by the GitHub and Azure DevOps providers.

    Args:
        headers: Extra headers sent with every request (auth, accept).
        timeout: Per-request timeout in seconds.
        max_retries: Retries after the first attempt for transient failures.
        base_delay: Delay before the first retry; doubles each attempt.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``
            in tests.
    """

    def __init__(
        self,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self._timeout = timeout
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._transport = transport

    async def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        """GET *url* and parse the body as JSON.

        Raises:
            ProviderError: On HTTP failure or a body that is not JSON.
        """
        resp = await self._get(url, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderError(f"Invalid JSON from {url}: {exc}") from exc

    async def get_text(self, url: str, *, params: dict[str, Any] | None = None) -> str:
        """GET *url* and return the body as text."""
        resp = await self._get(url, params=params)
        return resp.text

    async def get_bytes(self, url: str, *, params: dict[str, Any] | None = None) -> bytes:
        """GET *url* and return the raw body."""
        resp = await self._get(url, params=params)
        return resp.content

    async def _get(self, url: str, *, params: dict[str, Any] | None) -> httpx.Response:
        attempt = 0
        while True:
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    headers=self._headers,
                    follow_redirects=True,
                    transport=self._transport,
                ) as client:
                    logger.debug("GET %s", url)
                    resp = await client.get(url, params=params)
                    resp.raise_for_status()
                    return resp
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if attempt < self._max_retries and is_transient_status(status):
                    await self._backoff(attempt, f"HTTP {status}", url)
                    attempt += 1
                    continue
                raise ProviderError(_status_message(status, url), status_code=status) from exc
            except httpx.RequestError as exc:
                if attempt < self._max_retries:
                    await self._backoff(attempt, type(exc).__name__, url)
                    attempt += 1
                    continue
                raise ProviderError(f"Network error fetching {url}: {exc}") from exc

    async def _backoff(self, attempt: int, reason: str, url: str) -> None:
        delay = self._base_delay * (2 ** attempt)
        delay += random.uniform(0, delay * 0.3)
        logger.warning(
            "Transient failure (%s) for %s, attempt %d/%d, retrying in %.2fs",
            reason, url, attempt + 1, self._max_retries, delay,
        )
        await asyncio.sleep(delay)


def _status_message(status: int, url: str) -> str:
    if status in (401, 403):
        return (
            f"Authentication failed (HTTP {status}) for {url}. "
            "Ensure the repository is public or a valid token is configured."
        )
    if status == 404:
        return f"Not found (HTTP 404): {url}"
    return f"HTTP {status} from {url}"
