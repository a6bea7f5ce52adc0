"""Fetchers for source content.

Single URL fetching only: the catalog is closed, so there is no
sitemap or link discovery.
"""

from gleaner.acquire.fetchers.url import ContentFetcher, FetchResult

__all__ = [
    "ContentFetcher",
    "FetchResult",
]
