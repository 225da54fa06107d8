"""Async arXiv API client with rate limiting and retries."""

import asyncio
import logging
import time
from typing import Any

import httpx

from .config import ClientConfig
from .errors import ResponseReadError, TransportError
from .feed import decode_results
from .models import ArxivResult
from .query import ArxivQuery
from .settings import (
    ARXIV_BASE_URL,
    ARXIV_MAX_RETRIES,
    ARXIV_RATE_LIMIT_SECONDS,
    ARXIV_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "arxiv-query/0.1"

# Statuses that indicate a transient server-side condition
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class RateLimiter:
    """Rate limiter enforcing minimum delay between requests of one client."""

    def __init__(self, min_interval: float = 3.0):
        """
        Initialize rate limiter.

        Args:
            min_interval: Minimum seconds between requests (default: 3.0 per arXiv guidelines)
        """
        self._min_interval = min_interval
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_request_time(self) -> float | None:
        return self._last_request_time

    async def acquire(self) -> None:
        """Wait until min_interval has passed since the last recorded request."""
        async with self._lock:
            if self._last_request_time is None:
                return
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_interval:
                wait = self._min_interval - elapsed
                logger.debug(f"Rate limited, waiting {wait:.2f}s")
                await asyncio.sleep(wait)

    def mark(self) -> None:
        """Record that a request just finished."""
        self._last_request_time = time.monotonic()


class ArxivClient:
    """
    Async client for the arXiv search API.

    A fetch is atomic: it returns the whole decoded page or raises.

    Usage:
        async with ArxivClient(interval=3.0, n_retries=3) as client:
            results = await client.search(
                ArxivQuery().with_search_query("all:RAG").with_max_results(20)
            )
    """

    def __init__(
        self,
        interval: float = ARXIV_RATE_LIMIT_SECONDS,
        n_retries: int = ARXIV_MAX_RETRIES,
        base_url: str = ARXIV_BASE_URL,
        timeout: float = ARXIV_TIMEOUT_SECONDS,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize arXiv client.

        Args:
            interval: Minimum seconds between requests, also the pause between retries
            n_retries: Total number of attempts per request (at least 1)
            base_url: API endpoint
            timeout: Per-request timeout in seconds
            user_agent: Optional User-Agent header
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        if n_retries < 1:
            raise ValueError("n_retries must be at least 1")
        if interval < 0:
            raise ValueError("interval must be non-negative")

        self.base_url = base_url
        self._interval = interval
        self._n_retries = n_retries
        self._timeout = timeout
        self._transport = transport
        self.headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}
        self._rate_limiter = RateLimiter(interval)
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ArxivClient":
        """Create a client from a loaded ClientConfig."""
        return cls(
            interval=config.interval,
            n_retries=config.n_retries,
            base_url=config.base_url,
            timeout=config.timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def __aenter__(self) -> "ArxivClient":
        self._client = httpx.AsyncClient(
            headers=self.headers,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def search(self, query: ArxivQuery) -> list[ArxivResult]:
        """
        Fetch one page of results.

        Args:
            query: Query descriptor

        Returns:
            List of ArxivResult objects, in API response order

        Raises:
            UrlConstructionError: If the request URL cannot be built
            TransportError: If every attempt failed at the transport level
            ResponseReadError: If the response body could not be read
            DecodeError: If the body is not a valid feed
        """
        url = query.to_url(self.base_url)

        await self._rate_limiter.acquire()
        try:
            body = await self._get_with_retry(url)
        finally:
            self._rate_limiter.mark()

        results = decode_results(body)
        logger.info(
            f"arXiv query start={query.start} max_results={query.max_results} "
            f"returned {len(results)} results"
        )
        return results

    async def get_papers(self, arxiv_ids: list[str]) -> list[ArxivResult]:
        """
        Fetch papers by arXiv ID.

        Args:
            arxiv_ids: arXiv IDs, with or without an "arxiv:" prefix

        Returns:
            List of ArxivResult objects

        Raises:
            TypeError: If arxiv_ids is a single string
        """
        if isinstance(arxiv_ids, str):
            raise TypeError(f"arxiv_ids must be a list of IDs, not a string: {arxiv_ids!r}")

        clean_ids = [
            id.removeprefix("arxiv:").removeprefix("arXiv:") for id in arxiv_ids
        ]
        query = ArxivQuery().with_id_list(clean_ids).with_max_results(len(clean_ids))
        return await self.search(query)

    async def _get_with_retry(self, url: str) -> bytes:
        """GET url, retrying transport failures up to the attempt budget."""
        errors: list[str] = []

        for attempt in range(1, self._n_retries + 1):
            logger.debug(f"Request attempt {attempt}/{self._n_retries}: GET {url}")

            try:
                request = self.client.build_request("GET", url)
                response = await self.client.send(request, stream=True)
            except httpx.TransportError as e:
                message = f"attempt {attempt}: {type(e).__name__}: {e}"
                errors.append(message)
                logger.warning(f"Transport error on {message}")
            else:
                try:
                    if response.status_code in RETRYABLE_STATUS:
                        message = f"attempt {attempt}: HTTP {response.status_code}"
                        errors.append(message)
                        logger.warning(f"Server error on {message}")
                    else:
                        return await self._read_body(response)
                finally:
                    await response.aclose()

            if attempt < self._n_retries:
                await asyncio.sleep(self._interval)

        logger.error(f"Request failed after {self._n_retries} attempts: {url}")
        raise TransportError(errors, self._n_retries)

    async def _read_body(self, response: httpx.Response) -> bytes:
        try:
            await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise ResponseReadError(
                f"Failed to read response body from {response.request.url}: {e}"
            ) from e
        logger.debug(
            f"Response status: {response.status_code}, {len(response.content)} bytes"
        )
        return response.content
