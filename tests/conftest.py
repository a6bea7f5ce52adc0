"""Pytest configuration and fixtures for Gleaner tests."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from gleaner.core.config import GleanerSettings
from gleaner.core.types import Document, SourceEntry


@pytest.fixture
def settings(tmp_path: Path) -> GleanerSettings:
    """Settings pointing at a temporary corpus root, with no delay."""
    return GleanerSettings(
        corpus_root=tmp_path / "corpus",
        request_delay=0.0,
        request_timeout=5,
        robots_timeout=5,
    )


@pytest.fixture
def sample_source() -> SourceEntry:
    """Create a sample catalog entry for testing."""
    return SourceEntry(
        url="https://en.wikipedia.org/wiki/Algorithm",
        category="computer_science",
        subcategory="algorithms",
        title="Algorithm Fundamentals",
        priority=1,
    )


@pytest.fixture
def sample_document(sample_source: SourceEntry) -> Document:
    """Create an accepted document for testing."""
    return Document(
        source=sample_source,
        raw_content="<html><body><p>An algorithm is a finite sequence of instructions.</p></body></html>",
        clean_text="An algorithm is a finite sequence of instructions.",
        quality_score=0.72,
        metadata={"content_type": "text/html; charset=utf-8", "status_code": "200"},
    )


@pytest.fixture
def no_sleep() -> Callable:
    """Politeness delay replacement that records the requested delays."""
    calls: list[float] = []

    async def sleep(seconds: float) -> None:
        calls.append(seconds)

    sleep.calls = calls  # type: ignore[attr-defined]
    return sleep


def make_transport(
    routes: dict[str, httpx.Response | Callable[[httpx.Request], httpx.Response]],
    requests: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Build a mock transport answering by full URL; unknown URLs get a 404.

    Args:
        routes: URL -> response, or callable producing one
        requests: Optional list collecting every request seen
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="Not Found")
        if callable(route):
            return route(request)
        # Fresh response per request; a response object is single-use
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    return httpx.MockTransport(handler)


@pytest.fixture
def transport_factory() -> Callable[..., httpx.MockTransport]:
    """Factory fixture for mock HTTP transports."""
    return make_transport


ARTICLE_KEYWORDS = (
    "method technique approach analysis theory principle "
    "concept definition research study framework mechanism"
)
ARTICLE_TECHNICAL_TERMS = (
    "computational mathematical statistical empirical "
    "experimental quantitative qualitative"
)


def long_article(paragraphs: int = 2000) -> str:
    """Encyclopedic-style page: five words per paragraph plus one term-rich paragraph."""
    body = "".join("<p>lorem ipsum dolor sit amet</p>" for _ in range(paragraphs))
    return (
        "<html><head><title>Long form</title></head><body>"
        "<nav>Main page Contents Current events</nav>"
        f"{body}"
        f"<p>{ARTICLE_KEYWORDS} {ARTICLE_TECHNICAL_TERMS}</p>"
        "<footer>Text is available under a license</footer>"
        "</body></html>"
    )


@pytest.fixture
def long_article_html() -> str:
    """A page scoring 0.82 when served from an encyclopedic host."""
    return long_article()
