"""Per-host robots.txt permission cache.

This module provides the PermissionCache class that resolves a
host's robots.txt once per run and answers allow/deny questions
from the cached rules afterwards.

Resolution is fail-open: a missing, unreachable, slow or malformed
robots.txt is cached as "allow all" and not retried within the run.
"""

import re
from typing import Any
from urllib.parse import urlparse
from urllib.robotparser import RobotFileParser

import httpx

from gleaner.core.config import GleanerSettings, get_settings
from gleaner.core.exceptions import PermissionResolutionError
from gleaner.core.logging import get_logger

logger = get_logger(__name__)

_COMPATIBLE_TOKEN = re.compile(r"compatible;\s*([^;/)\s]+)", re.IGNORECASE)


class _AllowAll:
    """Cache sentinel for hosts whose rules could not be resolved."""

    def __repr__(self) -> str:
        return "ALLOW_ALL"


ALLOW_ALL = _AllowAll()


def robots_token(agent: str) -> str:
    """Product token used to match an agent identity against robots.txt.

    Browser-style identities such as
    "Mozilla/5.0 (compatible; Educational-Content-Collector/2.0; ...)"
    are matched by the product inside "compatible;", not by "Mozilla".
    """
    match = _COMPATIBLE_TOKEN.search(agent)
    if match:
        return match.group(1)
    return agent.split("/")[0].strip() or agent


def host_key(url: str) -> str | None:
    """Cache key (scheme://host[:port]) for a URL, or None if it has no host."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return None
    return f"{parsed.scheme.lower()}://{parsed.netloc.lower()}"


class PermissionCache:
    """Resolves and caches robots.txt rules per scheme and host.

    One instance lives for exactly one acquisition run. Every host is
    fetched at most once; later checks for any path on that host are
    answered from the cache.

    Example:
        >>> async with PermissionCache() as permissions:
        ...     if await permissions.allowed(url, agent):
        ...         ...
    """

    def __init__(
        self,
        config: GleanerSettings | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize PermissionCache.

        Args:
            config: Gleaner settings (uses defaults if not provided)
            timeout: Deadline for a robots.txt fetch in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.config = config or get_settings()
        self.timeout = timeout if timeout is not None else self.config.robots_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._rules: dict[str, RobotFileParser | _AllowAll] = {}

    async def __aenter__(self) -> "PermissionCache":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def cached_hosts(self) -> list[str]:
        """Hosts resolved so far in this run."""
        return list(self._rules)

    def is_fail_open(self, url: str) -> bool:
        """Whether the host of url is cached as allow-all."""
        key = host_key(url)
        return key is not None and self._rules.get(key) is ALLOW_ALL

    async def allowed(self, url: str, agent: str | None = None) -> bool:
        """Check whether agent may fetch url.

        Never raises. URLs without a scheme or host are denied.

        Args:
            url: URL to check
            agent: Agent identity (defaults to the configured user agent)

        Returns:
            True if robots.txt allows the fetch or could not be resolved
        """
        agent = agent or self.config.user_agent
        key = host_key(url)
        if key is None:
            logger.warning(f"Cannot check robots.txt for malformed URL: {url}")
            return False

        rules = self._rules.get(key)
        if rules is None:
            rules = await self._resolve(key)
            self._rules[key] = rules
        else:
            logger.debug(f"robots.txt cache hit for {key}")

        if rules is ALLOW_ALL:
            return True
        return rules.can_fetch(robots_token(agent), url)

    def crawl_delay(self, url: str, agent: str | None = None) -> float | None:
        """Crawl-delay requested by the cached rules for url's host, if any."""
        key = host_key(url)
        rules = self._rules.get(key) if key else None
        if rules is None or rules is ALLOW_ALL:
            return None
        delay = rules.crawl_delay(robots_token(agent or self.config.user_agent))
        return float(delay) if delay is not None else None

    async def _resolve(self, key: str) -> RobotFileParser | _AllowAll:
        """Fetch and parse robots.txt for a host, failing open."""
        try:
            return await self._load(key)
        except PermissionResolutionError as e:
            logger.info(f"robots.txt unavailable for {key}, allowing all: {e.message}")
            return ALLOW_ALL

    async def _load(self, key: str) -> RobotFileParser:
        """Fetch and parse robots.txt.

        Raises:
            PermissionResolutionError: On any network, status or parse failure
        """
        robots_url = f"{key}/robots.txt"
        client = await self._get_client()

        try:
            response = await client.get(robots_url)
        except httpx.TimeoutException as e:
            raise PermissionResolutionError(f"timed out after {self.timeout}s", url=robots_url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PermissionResolutionError(f"request failed: {e}", url=robots_url) from e

        if response.status_code != 200:
            raise PermissionResolutionError(f"HTTP {response.status_code}", url=robots_url)

        parser = RobotFileParser()
        parser.set_url(robots_url)
        try:
            parser.parse(response.text.splitlines())
        except (ValueError, TypeError, UnicodeError) as e:
            raise PermissionResolutionError(f"unparseable rules: {e}", url=robots_url) from e

        logger.debug(f"Fetched robots.txt for {key}")
        return parser
