"""Validation layer for Gleaner.

This module decides whether a source is worth keeping:
- Quality scoring of cleaned text
- URL-level duplicate detection against the corpus
"""

from gleaner.validate.quality import (
    DomainClasses,
    Lexicon,
    QualityBreakdown,
    QualityScorer,
)
from gleaner.validate.detectors.duplicates import DuplicateDetector

__all__ = [
    # Quality
    "QualityScorer",
    "QualityBreakdown",
    "Lexicon",
    "DomainClasses",
    # Duplicates
    "DuplicateDetector",
]
