"""RPC client helpers with retry on rate limiting."""

import logging
import time
from typing import Callable

import httpx
from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_DEFAULT_MAX_RETRIES = 5
_DEFAULT_BACKOFF_SECONDS = 2.0


def _retry_delay(response: httpx.Response, attempt: int, backoff: float) -> float:
    retry_after = response.headers.get("Retry-After", "")
    if retry_after.isdigit():
        return float(retry_after)
    return (attempt + 1) * backoff


class _RetryTransport(httpx.BaseTransport):
    """HTTP transport that retries on 429 Too Many Requests."""

    def __init__(
        self,
        wrapped: httpx.BaseTransport | None = None,
        max_retries: int = _DEFAULT_MAX_RETRIES,
        backoff: float = _DEFAULT_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._wrapped = wrapped or httpx.HTTPTransport()
        self._max_retries = max_retries
        self._backoff = backoff
        self._sleep = sleep

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            response = self._wrapped.handle_request(request)
            if response.status_code != 429 or attempt >= self._max_retries:
                return response
            delay = _retry_delay(response, attempt, self._backoff)
            logger.warning(
                "rpc rate limited by %s, retry %d/%d in %.1fs",
                request.url.host,
                attempt + 1,
                self._max_retries,
                delay,
            )
            response.close()
            self._sleep(delay)
            attempt += 1

    def close(self) -> None:
        self._wrapped.close()


def new_rpc_client(
    url: str,
    timeout: float = 30,
    max_retries: int = _DEFAULT_MAX_RETRIES,
) -> SolanaHTTPClient:
    """Create a Solana RPC client with automatic retry on 429 responses."""
    client = SolanaHTTPClient(url, timeout=timeout)
    # Replace the underlying httpx session with one using retry transport.
    transport = _RetryTransport(
        wrapped=httpx.HTTPTransport(),
        max_retries=max_retries,
    )
    client._provider.session = httpx.Client(
        timeout=timeout,
        transport=transport,
    )
    return client
