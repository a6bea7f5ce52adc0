"""Size-bounded acquisition control loop.

This module provides the AcquisitionOrchestrator class that walks the
source catalog in order and, for each source, checks robots.txt
permission and prior acquisition, fetches, cleans, scores and persists
it, until the catalog is exhausted or the corpus reaches its target
size.

Every processed catalog entry ends in exactly one Outcome, recorded
once per entry even when a URL is listed more than once. Per-source
failures never abort the run; only an unusable corpus root does.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from gleaner.acquire.extract import TextExtractor
from gleaner.acquire.fetchers.url import ContentFetcher, FetchResult
from gleaner.acquire.robots import PermissionCache
from gleaner.core.config import GleanerSettings, get_settings
from gleaner.core.exceptions import FetchError, PersistenceError
from gleaner.core.logging import LogContext, get_logger
from gleaner.core.types import Document, Outcome, RunStatistics, RunSummary, SourceEntry
from gleaner.ingest.corpus import CorpusStore
from gleaner.validate.detectors.duplicates import DuplicateDetector
from gleaner.validate.quality import QualityScorer

logger = get_logger(__name__)


@dataclass
class SourceResult:
    """How one catalog entry ended, before it is recorded."""
    outcome: Outcome
    document: Document | None = None
    size_delta: int = 0
    fetched: bool = False


class AcquisitionOrchestrator:
    """Sequential, polite acquisition of a source catalog.

    Sources are processed strictly one at a time in catalog order.
    After every source whose content was fetched, the orchestrator
    waits the configured delay before moving on.

    Example:
        >>> orchestrator = AcquisitionOrchestrator()
        >>> summary = await orchestrator.run(SourceCatalog.default())
        >>> print(summary.summary())
    """

    def __init__(
        self,
        config: GleanerSettings | None = None,
        store: CorpusStore | None = None,
        scorer: QualityScorer | None = None,
        extractor: TextExtractor | None = None,
        detector: DuplicateDetector | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize AcquisitionOrchestrator.

        Args:
            config: Gleaner settings (uses defaults if not provided)
            store: Corpus store (defaults to one at the configured root)
            scorer: Quality scorer
            extractor: Text extractor
            detector: Duplicate detector
            transport: Optional httpx transport shared by robots and content requests
            sleep: Coroutine used for the politeness delay
        """
        self.config = config or get_settings()
        self.store = store or CorpusStore(config=self.config)
        self.scorer = scorer or QualityScorer()
        self.extractor = extractor or TextExtractor(config=self.config)
        self.detector = detector or DuplicateDetector()
        self._transport = transport
        self._sleep = sleep

        # Per-run state, replaced at the start of every run
        self.permissions: PermissionCache | None = None
        self.statistics: RunStatistics | None = None

    def compliance(self) -> dict[str, Any]:
        """Politeness settings reported in the run summary."""
        return {
            "robots_txt_respected": True,
            "rate_limiting_delay": self.config.request_delay,
            "user_agent": self.config.user_agent,
            "duplicate_detection": True,
            "quality_threshold": self.config.quality_threshold,
        }

    async def run(self, sources: Iterable[SourceEntry]) -> RunSummary:
        """Acquire sources until the catalog ends or the target size is reached.

        Args:
            sources: Catalog entries, processed in the given order

        Returns:
            RunSummary of the run, also written to the corpus root

        Raises:
            CorpusRootError: If the corpus root cannot be created or used
        """
        self.store.ensure_root()

        sources = list(sources)
        target = self.config.target_size_bytes
        statistics = RunStatistics()
        self.statistics = statistics
        self.permissions = PermissionCache(config=self.config, transport=self._transport)

        logger.info(
            f"Starting acquisition of {len(sources)} sources into {self.store.root} "
            f"(target {target} bytes)"
        )

        async with self.permissions, ContentFetcher(
            config=self.config, transport=self._transport
        ) as fetcher:
            for index, source in enumerate(sources):
                size = self.store.current_size()
                if size >= target:
                    logger.info(f"Target size reached ({size} >= {target} bytes), stopping")
                    break

                with LogContext(url=source.url, category=source.category):
                    result = await self._process(source, fetcher)

                statistics.record(
                    source,
                    result.outcome,
                    document=result.document,
                    size_delta=result.size_delta,
                )

                if result.fetched and index < len(sources) - 1:
                    await self._sleep(self.config.request_delay)

        summary = statistics.summarize(
            target_bytes=target,
            final_size=self.store.current_size(),
            compliance=self.compliance(),
        )
        self.store.write_summary(summary)
        logger.info(summary.summary())
        return summary

    async def _process(
        self,
        source: SourceEntry,
        fetcher: ContentFetcher,
    ) -> SourceResult:
        """Classify one source, persisting it when accepted."""
        agent = self.config.user_agent

        if not await self.permissions.allowed(source.url, agent):
            logger.info(f"Blocked by robots.txt: {source.url}")
            return SourceResult(Outcome.PERMISSION_DENIED)

        delay = self.permissions.crawl_delay(source.url, agent)
        if delay is not None and delay > self.config.request_delay:
            logger.info(f"robots.txt asks for a {delay}s crawl delay on {source.url}")

        if self.detector.is_duplicate(self.store.root, source.url):
            logger.info(f"Already acquired, skipping: {source.url}")
            return SourceResult(Outcome.DUPLICATE)

        try:
            result = await fetcher.fetch(source.url, agent)
        except FetchError as e:
            logger.warning(f"Fetch failed for {source.url}: {e.message}")
            return SourceResult(Outcome.FETCH_FAILED)
        fetched_at = datetime.now()

        clean_text = self.extractor.clean(result.text)
        breakdown = self.scorer.breakdown(clean_text, source)
        if breakdown.total < self.config.quality_threshold:
            logger.info(
                f"Quality {breakdown.total:.2f} below threshold "
                f"{self.config.quality_threshold}: {source.url}"
            )
            return SourceResult(Outcome.QUALITY_REJECTED, fetched=True)

        document = Document(
            source=source,
            raw_content=result.text,
            raw_body=result.body,
            clean_text=clean_text,
            quality_score=breakdown.total,
            metadata=self._metadata(result),
            fetched_at=fetched_at,
        )

        size_before = self.store.current_size()
        try:
            self.store.persist(document)
        except PersistenceError as e:
            logger.error(f"Could not persist {source.url}: {e.message}")
            return SourceResult(Outcome.FETCH_FAILED, fetched=True)
        size_delta = self.store.current_size() - size_before

        logger.info(
            f"Accepted {source.title}: {document.word_count} words, "
            f"quality {document.quality_score:.2f}"
        )
        return SourceResult(
            Outcome.ACCEPTED, document=document, size_delta=size_delta, fetched=True
        )

    def _metadata(self, result: FetchResult) -> dict[str, str]:
        return {
            "content_type": result.content_type,
            "content_length": str(len(result.body)),
            "status_code": str(result.status_code),
            "url": result.url,
            "final_url": result.final_url,
            "scraped_with": "gleaner",
            "robots_checked": "true",
        }

    def run_sync(self, sources: Iterable[SourceEntry]) -> RunSummary:
        """Synchronous wrapper for run().

        Args:
            sources: Catalog entries, processed in the given order

        Returns:
            RunSummary of the run
        """
        return asyncio.run(self.run(sources))
