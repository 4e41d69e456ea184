"""
Base Source Module
==================

Abstract base class and shared HTTP plumbing for CFR text sources.

A source delivers regulatory text as a tree of titles, parts and
sections; the importer decides what to persist.

Version: 0.1.0
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from shared.config import ImportSettings
from shared.logging import get_logger


logger = get_logger(__name__)


@dataclass
class CFRSection:
    """A section of regulatory text."""

    number: str
    content: str
    last_updated: datetime | None = None


@dataclass
class CFRPart:
    """A part of a CFR title."""

    number: str
    name: str
    sections: list[CFRSection] = field(default_factory=list)


@dataclass
class CFRTitle:
    """A CFR title, mapped one-to-one onto an agency."""

    number: int
    name: str
    short_name: str | None = None
    description: str | None = None
    parts: list[CFRPart] = field(default_factory=list)


class CFRSource(ABC):
    """Abstract base class for regulation text sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Name of the source, reported in import summaries."""
        ...

    @property
    def is_live(self) -> bool:
        """Whether the source talks to an external service."""
        return False

    @abstractmethod
    async def fetch_titles(self) -> list[CFRTitle]:
        """
        Fetch the titles this source provides.

        Raises:
            SourceUnavailableError: if the source cannot deliver any data
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the source."""
        return None


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, (httpx.ConnectError, httpx.TimeoutException)):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status == 429 or status >= 500
    return False


class HttpSource(CFRSource):
    """
    Base class for sources backed by an HTTP API.

    Provides:
    - A lazily created HTTP/2 client
    - Minimum interval between requests
    - Exponential-backoff retries on connection errors, timeouts,
      rate limiting and server errors
    """

    def __init__(self, config: ImportSettings) -> None:
        """
        Initialize the source.

        Args:
            config: Import configuration (timeouts, retries, rate limit)
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self._request_count = 0
        self._last_request_time: datetime | None = None

    @property
    def is_live(self) -> bool:
        return True

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout_seconds),
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json",
                },
                follow_redirects=True,
                http2=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _throttle(self) -> None:
        if self._last_request_time is None:
            return
        elapsed = (datetime.now(UTC) - self._last_request_time).total_seconds()
        min_interval = 60.0 / self.config.requests_per_minute
        if elapsed < min_interval:
            await asyncio.sleep(min_interval - elapsed)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request with rate limiting and retry.

        Args:
            method: HTTP method
            url: URL to request
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response
        """
        client = await self._get_client()

        async for attempt in AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=30),
            before_sleep=lambda retry_state: logger.warning(
                "source_request_retry",
                source=self.source_name,
                url=url,
                attempt=retry_state.attempt_number,
            ),
            reraise=True,
        ):
            with attempt:
                await self._throttle()
                self._last_request_time = datetime.now(UTC)
                self._request_count += 1

                response = await client.request(method, url, **kwargs)
                response.raise_for_status()

        logger.debug(
            "source_request",
            source=self.source_name,
            url=url,
            status=response.status_code,
        )
        return response
