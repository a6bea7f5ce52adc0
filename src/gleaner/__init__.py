"""Gleaner - polite acquisition of an educational training corpus.

Check. Fetch. Score. Keep.

Gleaner walks a curated catalog of sources, respects each host's
robots.txt, skips sources it already holds, and keeps only documents
whose cleaned text scores above a quality threshold, until the corpus
reaches its target size.

Example:
    >>> from gleaner import AcquisitionOrchestrator, SourceCatalog, configure
    >>>
    >>> configure(corpus_root="./training-content", target_size_bytes=50_000_000)
    >>> orchestrator = AcquisitionOrchestrator()
    >>> summary = orchestrator.run_sync(SourceCatalog.default())
    >>> print(summary.summary())
"""

from gleaner._version import __version__
from gleaner.core.catalog import SourceCatalog
from gleaner.core.config import GleanerSettings, configure, get_settings
from gleaner.core.exceptions import (
    AcquisitionError,
    CatalogError,
    ConfigurationError,
    CorpusRootError,
    FetchError,
    GleanerError,
    PersistenceError,
)
from gleaner.core.logging import get_logger, setup_logging
from gleaner.core.types import (
    Document,
    Outcome,
    RunStatistics,
    RunSummary,
    SourceEntry,
)

__all__ = [
    # Version
    "__version__",
    # Core types
    "SourceEntry",
    "Document",
    "Outcome",
    "RunStatistics",
    "RunSummary",
    "SourceCatalog",
    # Config
    "GleanerSettings",
    "get_settings",
    "configure",
    # Exceptions
    "GleanerError",
    "ConfigurationError",
    "CatalogError",
    "AcquisitionError",
    "FetchError",
    "PersistenceError",
    "CorpusRootError",
    # Logging
    "get_logger",
    "setup_logging",
    # Acquisition (lazy)
    "AcquisitionOrchestrator",
    "PermissionCache",
    "ContentFetcher",
    "TextExtractor",
    # Validation (lazy)
    "QualityScorer",
    "DuplicateDetector",
    # Ingestion (lazy)
    "CorpusStore",
]


def __getattr__(name: str):
    """Lazy import for modules that pull in the HTTP and parsing stack."""
    if name == "AcquisitionOrchestrator":
        from gleaner.acquire.orchestrator import AcquisitionOrchestrator
        return AcquisitionOrchestrator

    if name == "PermissionCache":
        from gleaner.acquire.robots import PermissionCache
        return PermissionCache

    if name == "ContentFetcher":
        from gleaner.acquire.fetchers.url import ContentFetcher
        return ContentFetcher

    if name == "TextExtractor":
        from gleaner.acquire.extract import TextExtractor
        return TextExtractor

    if name == "QualityScorer":
        from gleaner.validate.quality import QualityScorer
        return QualityScorer

    if name == "DuplicateDetector":
        from gleaner.validate.detectors.duplicates import DuplicateDetector
        return DuplicateDetector

    if name == "CorpusStore":
        from gleaner.ingest.corpus import CorpusStore
        return CorpusStore

    raise AttributeError(f"module 'gleaner' has no attribute {name!r}")
