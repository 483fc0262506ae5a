from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from ._errors import APIError, FetchError
from .config import DEFAULT_TIMEOUT, MAX_RETRIES, RETRY_DELAY, FetchSettings, resolve_endpoint

logger = logging.getLogger(__name__)

USER_AGENT = "CrossBench/1.0"


class FetchClient:
    """Blocking fetcher with a fixed number of attempts and a fixed delay between them."""

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")
        self._endpoint = resolve_endpoint(endpoint)
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep
        self._client: httpx.Client | None = None

    @classmethod
    def from_settings(cls, settings: FetchSettings, **kwargs: Any) -> FetchClient:
        return cls(
            settings.endpoint,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            timeout=settings.timeout,
            **kwargs,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> FetchClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _get_payload(self) -> httpx.Response:
        response = self._get_client().get(self._endpoint)
        if not response.is_success:
            raise APIError.from_status(
                self._endpoint, response.status_code, response.reason_phrase, response.text
            )
        return response

    def fetch(self) -> bytes:
        """Return the raw response body, or raise ``FetchError`` once attempts run out."""
        logger.info("Connecting to %s", httpx.URL(self._endpoint).host)
        last_error: str | None = None
        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._get_payload()
                if response.content:
                    logger.info("Received %d bytes", len(response.content))
                    return response.content
                last_error = "empty response body"
            except (httpx.HTTPError, APIError) as exc:
                last_error = str(exc)
            logger.warning("Attempt %d/%d failed (%s)", attempt, self._max_retries, last_error)
            if attempt < self._max_retries:
                self._sleep(self._retry_delay)
        raise FetchError(self._endpoint, self._max_retries, last_error)


__all__ = ["FetchClient"]
