"""Core data types for Gleaner.

This module defines the fundamental data structures used throughout Gleaner:
- SourceEntry: One catalog entry describing a document to acquire
- Document: A fetched document that survived quality filtering
- Outcome: Terminal classification of a processed source
- RunStatistics: Mutable accumulator owned by the orchestrator
- RunSummary: Finalized statistics of one run
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class SourceEntry:
    """One externally supplied description of a document to acquire.

    Identity is the URL. Entries are read-only for the duration of a run.

    Attributes:
        url: Address of the document
        category: Top-level corpus partition (e.g. "science")
        subcategory: Second-level partition (e.g. "biology")
        title: Human-readable title, also used in training file names
        quality_tier: Expected quality label from the catalog ("high", ...)
        language: Language code of the content
        expected_content: Free-form tag describing the expected content
        priority: Catalog priority (1 = highest); informational only
    """
    url: str
    category: str
    subcategory: str
    title: str
    quality_tier: str = "high"
    language: str = "en"
    expected_content: str = ""
    priority: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary."""
        return {
            "url": self.url,
            "category": self.category,
            "subcategory": self.subcategory,
            "title": self.title,
            "quality": self.quality_tier,
            "language": self.language,
            "expected_content": self.expected_content,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceEntry":
        """Create an entry from a dictionary.

        Accepts both "quality" and "quality_tier" for the tier field.
        """
        return cls(
            url=data["url"],
            category=data["category"],
            subcategory=data.get("subcategory", "general"),
            title=data.get("title", data["url"]),
            quality_tier=data.get("quality_tier", data.get("quality", "high")),
            language=data.get("language", "en"),
            expected_content=data.get("expected_content", ""),
            priority=int(data.get("priority", 3)),
        )


@dataclass
class Document:
    """A fetched document that survived quality filtering.

    Created by the orchestrator after a successful fetch and owned
    by the corpus store once persisted.

    Attributes:
        source: Catalog entry the document was fetched from
        raw_content: Markup as fetched, decoded to text
        clean_text: Normalized, boilerplate-stripped text
        quality_score: Heuristic score in [0, 1]
        metadata: Fetch metadata (content type, status code, ...)
        id: Unique identifier of this accepted fetch
        fetched_at: When the content was fetched
        processed_at: When cleaning and scoring finished
        raw_body: The fetched bytes exactly as received, when available
    """
    source: SourceEntry
    raw_content: str
    clean_text: str
    quality_score: float
    metadata: dict[str, str] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    fetched_at: datetime = field(default_factory=datetime.now)
    processed_at: datetime = field(default_factory=datetime.now)
    raw_body: bytes | None = None

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words in the clean text."""
        return len(self.clean_text.split())

    @property
    def char_count(self) -> int:
        """Number of characters in the clean text."""
        return len(self.clean_text)

    def to_dict(self) -> dict[str, Any]:
        """Convert document to dictionary for serialization."""
        return {
            "id": self.id,
            "source": self.source.to_dict(),
            "content": self.raw_content,
            "clean_text": self.clean_text,
            "word_count": self.word_count,
            "char_count": self.char_count,
            "quality_score": self.quality_score,
            "metadata": self.metadata,
            "scraped_at": self.fetched_at.isoformat(),
            "processed_at": self.processed_at.isoformat(),
        }


class Outcome(str, Enum):
    """Terminal classification of one processed source.

    Exactly one outcome is recorded per processed catalog entry.
    """

    ACCEPTED = "accepted"
    PERMISSION_DENIED = "permission_denied"
    DUPLICATE = "duplicate"
    FETCH_FAILED = "fetch_failed"
    QUALITY_REJECTED = "quality_rejected"


@dataclass
class CategoryStats:
    """Aggregate figures for the accepted documents of one category."""
    count: int = 0
    total_words: int = 0
    total_chars: int = 0
    quality_sum: float = 0.0

    @property
    def avg_quality(self) -> float:
        return self.quality_sum / self.count if self.count else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "total_words": self.total_words,
            "total_chars": self.total_chars,
            "avg_quality": self.avg_quality,
        }


@dataclass
class RunStatistics:
    """Mutable accumulator for one acquisition run.

    Only the orchestrator mutates it, through record(), once per
    processed catalog position. A URL listed twice in the catalog
    gets two entries (the second normally a duplicate).

    Attributes:
        outcomes: (url, outcome) per processed source, in processing order
        documents: Accepted documents (read view for aggregates)
        categories: Per-category aggregates of accepted documents
        bytes_added: Corpus growth attributed to accepted documents
        started_at: When the run started
    """
    outcomes: list[tuple[str, Outcome]] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)
    categories: dict[str, CategoryStats] = field(default_factory=dict)
    bytes_added: int = 0
    started_at: datetime = field(default_factory=datetime.now)

    def record(
        self,
        source: SourceEntry,
        outcome: Outcome,
        document: Document | None = None,
        size_delta: int = 0,
    ) -> None:
        """Record the terminal outcome of one processed catalog entry.

        Args:
            source: The processed catalog entry
            outcome: Its classification
            document: The persisted document, required for ACCEPTED
            size_delta: Corpus growth caused by persisting the document

        Raises:
            ValueError: If an ACCEPTED outcome comes without its document
        """
        if outcome is Outcome.ACCEPTED and document is None:
            raise ValueError("An accepted outcome requires the persisted document")

        self.outcomes.append((source.url, outcome))

        if outcome is Outcome.ACCEPTED:
            self.documents.append(document)
            self.bytes_added += size_delta
            stats = self.categories.setdefault(source.category, CategoryStats())
            stats.count += 1
            stats.total_words += document.word_count
            stats.total_chars += document.char_count
            stats.quality_sum += document.quality_score

    def count(self, outcome: Outcome) -> int:
        """Number of sources recorded with the given outcome."""
        return sum(1 for _, o in self.outcomes if o is outcome)

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return self.count(Outcome.ACCEPTED)

    @property
    def permission_blocked(self) -> int:
        return self.count(Outcome.PERMISSION_DENIED)

    @property
    def quality_filtered(self) -> int:
        return self.count(Outcome.QUALITY_REJECTED)

    @property
    def duplicates_skipped(self) -> int:
        return self.count(Outcome.DUPLICATE)

    @property
    def fetch_failed(self) -> int:
        return self.count(Outcome.FETCH_FAILED)

    def summarize(
        self,
        target_bytes: int,
        final_size: int,
        compliance: dict[str, Any] | None = None,
    ) -> "RunSummary":
        """Finalize the accumulator into a RunSummary.

        Args:
            target_bytes: Size budget of the run
            final_size: Corpus size at the end of the run
            compliance: Politeness settings to report alongside

        Returns:
            RunSummary for reporting
        """
        total_words = sum(d.word_count for d in self.documents)
        total_chars = sum(d.char_count for d in self.documents)
        avg_quality = (
            sum(d.quality_score for d in self.documents) / len(self.documents)
            if self.documents
            else 0.0
        )
        return RunSummary(
            documents=len(self.documents),
            total_words=total_words,
            total_chars=total_chars,
            avg_quality=avg_quality,
            outcome_counts={o.value: self.count(o) for o in Outcome},
            processed=self.processed,
            bytes_added=self.bytes_added,
            categories={k: v.to_dict() for k, v in self.categories.items()},
            target_bytes=target_bytes,
            final_size_bytes=final_size,
            started_at=self.started_at,
            compliance=compliance or {},
        )


@dataclass
class RunSummary:
    """Finalized statistics of one acquisition run.

    Attributes:
        documents: Number of accepted documents
        total_words: Words across accepted documents
        total_chars: Characters across accepted documents
        avg_quality: Mean quality score of accepted documents
        outcome_counts: Count per Outcome value
        processed: Number of sources processed
        bytes_added: Corpus growth attributed to accepted documents
        categories: Per-category breakdown of accepted documents
        target_bytes: Size budget of the run
        final_size_bytes: Corpus size at the end of the run
        started_at: When the run started
        finished_at: When the summary was produced
        compliance: Politeness settings in effect
    """
    documents: int
    total_words: int
    total_chars: int
    avg_quality: float
    outcome_counts: dict[str, int]
    processed: int
    bytes_added: int
    categories: dict[str, dict[str, Any]]
    target_bytes: int
    final_size_bytes: int
    started_at: datetime
    finished_at: datetime = field(default_factory=datetime.now)
    compliance: dict[str, Any] = field(default_factory=dict)

    @property
    def completion(self) -> float:
        """Fraction of the size budget reached (may exceed 1.0)."""
        return self.final_size_bytes / self.target_bytes if self.target_bytes else 0.0

    @property
    def target_reached(self) -> bool:
        return self.final_size_bytes >= self.target_bytes

    def summary(self) -> str:
        """Generate human-readable summary."""
        counts = self.outcome_counts
        return (
            f"Acquisition run: {self.processed} sources processed\n"
            f"  Accepted: {counts.get(Outcome.ACCEPTED.value, 0)}, "
            f"robots blocked: {counts.get(Outcome.PERMISSION_DENIED.value, 0)}, "
            f"duplicates: {counts.get(Outcome.DUPLICATE.value, 0)}, "
            f"fetch failed: {counts.get(Outcome.FETCH_FAILED.value, 0)}, "
            f"quality filtered: {counts.get(Outcome.QUALITY_REJECTED.value, 0)}\n"
            f"  Words: {self.total_words}, avg quality: {self.avg_quality:.2f}\n"
            f"  Corpus: {self.final_size_bytes} / {self.target_bytes} bytes "
            f"({self.completion:.1%})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert summary to dictionary for the summary file."""
        return {
            "final_results": {
                "target_achieved": self.target_reached,
                "target_size_bytes": self.target_bytes,
                "final_size_bytes": self.final_size_bytes,
                "completion_percentage": self.completion * 100,
                "total_documents": self.documents,
                "total_words": self.total_words,
                "total_characters": self.total_chars,
                "average_quality": self.avg_quality,
            },
            "processing_summary": {
                "sources_processed": self.processed,
                "successful_scrapes": self.outcome_counts.get(Outcome.ACCEPTED.value, 0),
                "robots_blocked": self.outcome_counts.get(Outcome.PERMISSION_DENIED.value, 0),
                "quality_filtered": self.outcome_counts.get(Outcome.QUALITY_REJECTED.value, 0),
                "duplicates_skipped": self.outcome_counts.get(Outcome.DUPLICATE.value, 0),
                "fetch_failed": self.outcome_counts.get(Outcome.FETCH_FAILED.value, 0),
                "bytes_added": self.bytes_added,
            },
            "category_breakdown": self.categories,
            "ethical_compliance": self.compliance,
            "session": {
                "started_at": self.started_at.isoformat(),
                "finished_at": self.finished_at.isoformat(),
            },
        }
