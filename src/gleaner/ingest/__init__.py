"""Ingestion layer for Gleaner.

This module writes accepted documents into the on-disk
training corpus.
"""

from gleaner.ingest.corpus import CorpusStore, raw_extension, training_header

__all__ = [
    "CorpusStore",
    "raw_extension",
    "training_header",
]
