"""Heuristic quality scoring for fetched documents.

The score is additive over four independently capped components
(length tier, educational keywords, domain trust, technical terms)
and clamped to [0, 1]. It is a pure function of the text, the
source URL, the lexicon and the domain classes.
"""

import fnmatch
from dataclasses import dataclass, field
from urllib.parse import urlparse

from gleaner.core.types import SourceEntry

# (exclusive lower bound on word count, score), checked in order
LENGTH_TIERS: tuple[tuple[int, float], ...] = (
    (15000, 0.35),
    (8000, 0.25),
    (3000, 0.15),
    (1000, 0.08),
)

KEYWORD_WEIGHT = 0.015
KEYWORD_CAP = 0.30
TECHNICAL_WEIGHT = 0.02
TECHNICAL_CAP = 0.20
ACADEMIC_BONUS = 0.35
ENCYCLOPEDIC_BONUS = 0.25

DEFAULT_KEYWORDS: tuple[str, ...] = (
    "algorithm", "method", "technique", "approach", "implementation", "analysis",
    "theory", "principle", "concept", "definition", "explanation", "example",
    "research", "study", "development", "system", "framework", "model",
    "optimization", "complexity", "performance", "efficiency", "scalability",
    "architecture", "design", "pattern", "structure", "function", "mechanism",
)

DEFAULT_TECHNICAL_TERMS: tuple[str, ...] = (
    "computational", "mathematical", "statistical", "algorithmic", "systematic",
    "formal", "theoretical", "empirical", "experimental", "analytical",
    "quantitative", "qualitative", "optimization", "implementation", "evaluation",
)


@dataclass(frozen=True)
class Lexicon:
    """Ordered keyword and technical-term lists used for scoring.

    Terms are matched as lower-case substrings of the lower-cased text;
    each distinct term counts once however often it occurs.
    """
    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    technical_terms: tuple[str, ...] = DEFAULT_TECHNICAL_TERMS

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(k.lower() for k in self.keywords))
        object.__setattr__(
            self, "technical_terms", tuple(t.lower() for t in self.technical_terms)
        )


@dataclass(frozen=True)
class DomainClasses:
    """Host patterns for the trusted domain classes.

    Patterns are fnmatch-style and matched against the lower-cased
    host name. Academic hosts are checked first; a host earns at most
    one bonus.
    """
    academic: tuple[str, ...] = (
        "*.edu", "*.edu.*", "*.ac.uk", "*.ac.jp", "*.ac.nz", "*.ac.za", "*.ac.in",
    )
    encyclopedic: tuple[str, ...] = (
        "wikipedia.org", "*.wikipedia.org", "britannica.com", "*.britannica.com",
        "scholarpedia.org", "*.scholarpedia.org",
    )

    def classify(self, url: str) -> str | None:
        """Return "academic", "encyclopedic" or None for a URL."""
        host = (urlparse(url).hostname or "").lower()
        if not host:
            return None
        if any(fnmatch.fnmatchcase(host, p) for p in self.academic):
            return "academic"
        if any(fnmatch.fnmatchcase(host, p) for p in self.encyclopedic):
            return "encyclopedic"
        return None


@dataclass(frozen=True)
class QualityBreakdown:
    """Capped score components for one document.

    Attributes:
        word_count: Whitespace-separated words in the text
        length: Length-tier component
        keywords: Educational-keyword component (<= 0.30)
        domain: Domain-trust component
        technical: Technical-term component (<= 0.20)
        keyword_hits: Distinct keywords found
        technical_hits: Distinct technical terms found
        domain_class: Trusted class of the source host, if any
    """
    word_count: int
    length: float
    keywords: float
    domain: float
    technical: float
    keyword_hits: tuple[str, ...] = field(default_factory=tuple)
    technical_hits: tuple[str, ...] = field(default_factory=tuple)
    domain_class: str | None = None

    @property
    def total(self) -> float:
        """Sum of the components, clamped to [0, 1]."""
        raw = self.length + self.keywords + self.domain + self.technical
        return min(max(raw, 0.0), 1.0)


def length_score(word_count: int) -> float:
    """Score for the length tier of a word count."""
    for bound, score in LENGTH_TIERS:
        if word_count > bound:
            return score
    return 0.0


class QualityScorer:
    """Deterministic heuristic scorer.

    Example:
        >>> scorer = QualityScorer()
        >>> scorer.score(text, source)
        0.82
    """

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        domains: DomainClasses | None = None,
    ) -> None:
        self.lexicon = lexicon or Lexicon()
        self.domains = domains or DomainClasses()

    def breakdown(self, text: str, source: SourceEntry) -> QualityBreakdown:
        """Compute every capped component for text fetched from source."""
        lowered = text.lower()
        word_count = len(text.split())

        keyword_hits = tuple(k for k in dict.fromkeys(self.lexicon.keywords) if k in lowered)
        technical_hits = tuple(
            t for t in dict.fromkeys(self.lexicon.technical_terms) if t in lowered
        )

        domain_class = self.domains.classify(source.url)
        if domain_class == "academic":
            domain = ACADEMIC_BONUS
        elif domain_class == "encyclopedic":
            domain = ENCYCLOPEDIC_BONUS
        else:
            domain = 0.0

        return QualityBreakdown(
            word_count=word_count,
            length=length_score(word_count),
            keywords=min(len(keyword_hits) * KEYWORD_WEIGHT, KEYWORD_CAP),
            domain=domain,
            technical=min(len(technical_hits) * TECHNICAL_WEIGHT, TECHNICAL_CAP),
            keyword_hits=keyword_hits,
            technical_hits=technical_hits,
            domain_class=domain_class,
        )

    def score(self, text: str, source: SourceEntry) -> float:
        """Quality score in [0, 1] for text fetched from source."""
        return self.breakdown(text, source).total
