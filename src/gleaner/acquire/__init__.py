"""Acquisition layer for Gleaner.

This module provides polite acquisition of catalog sources:
- robots.txt permission checks (cached per host)
- Single URL fetching
- Markup to text extraction
- The size-bounded orchestration loop
"""

from gleaner.acquire.robots import PermissionCache
from gleaner.acquire.fetchers import ContentFetcher, FetchResult
from gleaner.acquire.extract import TextExtractor
from gleaner.acquire.orchestrator import AcquisitionOrchestrator

__all__ = [
    # Permissions
    "PermissionCache",
    # Fetchers
    "ContentFetcher",
    "FetchResult",
    # Extraction
    "TextExtractor",
    # Orchestration
    "AcquisitionOrchestrator",
]
