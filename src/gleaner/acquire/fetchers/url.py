"""Single URL content fetcher.

This module provides the ContentFetcher class that retrieves the raw
content of one catalog source with a single, deadline-bounded httpx
request. Failures are raised as FetchError and never retried.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from gleaner.core.config import GleanerSettings, get_settings
from gleaner.core.exceptions import FetchError, FetchErrorKind
from gleaner.core.logging import get_logger

logger = get_logger(__name__)

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.5"


@dataclass
class FetchResult:
    """Result from fetching a single URL."""
    url: str
    status_code: int
    body: bytes
    text: str
    content_type: str
    final_url: str


class ContentFetcher:
    """Deadline-bounded fetcher for source content.

    Issues exactly one GET per call with identifying headers. Any
    non-2xx status is a terminal failure for that source.

    Example:
        >>> async with ContentFetcher() as fetcher:
        ...     result = await fetcher.fetch("https://example.com")
        ...     print(result.text)
    """

    def __init__(
        self,
        config: GleanerSettings | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize ContentFetcher.

        Args:
            config: Gleaner settings (uses defaults if not provided)
            timeout: Total request deadline in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.config = config or get_settings()
        self.timeout = timeout if timeout is not None else self.config.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ContentFetcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def headers(self, agent: str | None = None) -> dict[str, str]:
        """Request headers identifying the collector."""
        return {
            "User-Agent": agent or self.config.user_agent,
            "Accept": ACCEPT,
            "Accept-Language": ACCEPT_LANGUAGE,
            "Cache-Control": "no-cache",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(
        self,
        url: str,
        agent: str | None = None,
        timeout: float | None = None,
    ) -> FetchResult:
        """Fetch a single URL.

        Args:
            url: URL to fetch
            agent: Agent identity (defaults to the configured user agent)
            timeout: Deadline override in seconds

        Returns:
            FetchResult with the raw body and decoded text

        Raises:
            FetchError: On timeout, transport failure or non-2xx status
        """
        deadline = timeout if timeout is not None else self.timeout
        client = await self._get_client()

        try:
            response = await asyncio.wait_for(
                client.get(url, headers=self.headers(agent), timeout=deadline),
                timeout=deadline,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FetchError(
                f"Timed out after {deadline}s",
                url=url,
                kind=FetchErrorKind.TIMEOUT,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(
                f"Request failed: {e}",
                url=url,
                kind=FetchErrorKind.NETWORK,
            ) from e

        if not response.is_success:
            raise FetchError(
                f"HTTP {response.status_code}",
                url=url,
                kind=FetchErrorKind.HTTP_STATUS,
                status_code=response.status_code,
            )

        logger.debug(f"Fetched {url} ({len(response.content)} bytes)")
        return FetchResult(
            url=url,
            status_code=response.status_code,
            body=response.content,
            text=response.text,
            content_type=response.headers.get("content-type", ""),
            final_url=str(response.url),
        )
