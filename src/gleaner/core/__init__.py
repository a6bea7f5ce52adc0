"""Core module for Gleaner - types, configuration, and utilities."""

from gleaner.core.types import (
    CategoryStats,
    Document,
    Outcome,
    RunStatistics,
    RunSummary,
    SourceEntry,
)
from gleaner.core.config import GleanerSettings
from gleaner.core.exceptions import (
    GleanerError,
    ConfigurationError,
    CatalogError,
    AcquisitionError,
    FetchError,
    FetchErrorKind,
    PermissionResolutionError,
    PersistenceError,
    CorpusRootError,
)
from gleaner.core.catalog import SourceCatalog

__all__ = [
    # Types
    "SourceEntry",
    "Document",
    "Outcome",
    "CategoryStats",
    "RunStatistics",
    "RunSummary",
    # Config
    "GleanerSettings",
    # Catalog
    "SourceCatalog",
    # Exceptions
    "GleanerError",
    "ConfigurationError",
    "CatalogError",
    "AcquisitionError",
    "FetchError",
    "FetchErrorKind",
    "PermissionResolutionError",
    "PersistenceError",
    "CorpusRootError",
]
