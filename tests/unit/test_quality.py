"""Tests for heuristic quality scoring."""

import pytest

from gleaner.core.types import SourceEntry
from gleaner.validate.quality import (
    DEFAULT_KEYWORDS,
    DEFAULT_TECHNICAL_TERMS,
    DomainClasses,
    Lexicon,
    QualityScorer,
    length_score,
)


def source(url: str) -> SourceEntry:
    return SourceEntry(url=url, category="misc", subcategory="general", title="Test")


def filler(words: int) -> str:
    return " ".join(["lorem"] * words)


PLAIN = source("https://blog.example.com/post")
WIKI = source("https://en.wikipedia.org/wiki/Graph_theory")
EDU = source("https://cs.stanford.edu/notes")


class TestLengthTiers:
    """Tests for the length component."""

    @pytest.mark.parametrize(
        "words,expected",
        [
            (0, 0.0),
            (1000, 0.0),
            (1001, 0.08),
            (3000, 0.08),
            (3001, 0.15),
            (8001, 0.25),
            (15000, 0.25),
            (15001, 0.35),
        ],
    )
    def test_tier_bounds(self, words, expected):
        """Test tier bounds are exclusive."""
        assert length_score(words) == expected

    def test_monotonic(self):
        """Test more words never lower the score, other things equal."""
        scorer = QualityScorer()
        scores = [scorer.score(filler(n), PLAIN) for n in (10, 1500, 5000, 9000, 16000)]
        assert scores == sorted(scores)


class TestComponents:
    """Tests for keyword, technical and domain components."""

    def test_keyword_caps(self):
        """Test all keywords present stays within the cap."""
        breakdown = QualityScorer().breakdown(" ".join(DEFAULT_KEYWORDS), PLAIN)
        assert breakdown.keywords == pytest.approx(0.30)
        assert len(breakdown.keyword_hits) == len(DEFAULT_KEYWORDS)

    def test_technical_cap(self):
        breakdown = QualityScorer().breakdown(" ".join(DEFAULT_TECHNICAL_TERMS), PLAIN)
        assert breakdown.technical == pytest.approx(0.20)

    def test_repeated_terms_count_once(self):
        breakdown = QualityScorer().breakdown("theory theory THEORY Theory", PLAIN)
        assert breakdown.keyword_hits == ("theory",)
        assert breakdown.keywords == pytest.approx(0.015)

    def test_substring_matching(self):
        """Test terms match inside longer words."""
        breakdown = QualityScorer().breakdown("redesigned frameworks", PLAIN)
        assert "design" in breakdown.keyword_hits
        assert "framework" in breakdown.keyword_hits

    def test_domain_bonus_exclusive(self):
        """Test a host earns at most one domain bonus."""
        scorer = QualityScorer()
        assert scorer.breakdown("", EDU).domain == pytest.approx(0.35)
        assert scorer.breakdown("", WIKI).domain == pytest.approx(0.25)
        assert scorer.breakdown("", PLAIN).domain == 0.0

    def test_academic_wins_when_both_match(self):
        domains = DomainClasses(academic=("*.example.org",), encyclopedic=("*.example.org",))
        scorer = QualityScorer(domains=domains)
        assert scorer.breakdown("", source("https://www.example.org/x")).domain == pytest.approx(0.35)

    def test_domain_classification(self):
        domains = DomainClasses()
        assert domains.classify("https://www.ox.ac.uk/research") == "academic"
        assert domains.classify("https://wikipedia.org/") == "encyclopedic"
        assert domains.classify("https://www.britannica.com/topic/x") == "encyclopedic"
        assert domains.classify("https://education.example.com/") is None
        assert domains.classify("not a url") is None

    def test_custom_lexicon(self):
        scorer = QualityScorer(lexicon=Lexicon(keywords=("Enzyme",), technical_terms=()))
        breakdown = scorer.breakdown("enzyme kinetics", PLAIN)
        assert breakdown.keyword_hits == ("enzyme",)
        assert breakdown.technical == 0.0


class TestScore:
    """Tests for the combined score."""

    def test_bounds(self):
        """Test the score stays in [0, 1] even with every component maxed."""
        text = filler(16000) + " " + " ".join(DEFAULT_KEYWORDS + DEFAULT_TECHNICAL_TERMS)
        score = QualityScorer().score(text, EDU)
        assert score == 1.0

    def test_empty_text(self):
        assert QualityScorer().score("", PLAIN) == 0.0

    def test_deterministic(self):
        scorer = QualityScorer()
        text = filler(4000) + " analysis theory computational"
        assert scorer.score(text, WIKI) == scorer.score(text, WIKI)

    def test_long_encyclopedic_article(self):
        """Test a long article with a handful of terms scores as expected."""
        keywords = "method technique approach analysis theory principle concept definition research study framework mechanism"
        technical = "computational mathematical statistical empirical experimental quantitative qualitative"
        text = f"{filler(9000)} {keywords} {technical}"

        breakdown = QualityScorer().breakdown(text, WIKI)
        assert breakdown.length == 0.25
        assert breakdown.keywords == pytest.approx(12 * 0.015)
        assert breakdown.technical == pytest.approx(7 * 0.02)
        assert breakdown.total == pytest.approx(0.82)
