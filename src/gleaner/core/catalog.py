"""Source catalog for acquisition runs.

This module provides the SourceCatalog class: the closed, ordered
list of SourceEntry records a run works through. Catalog order is
the processing order; entries are never re-sorted by priority.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

import yaml

from gleaner.core.config import get_settings
from gleaner.core.exceptions import CatalogError
from gleaner.core.types import SourceEntry


DEFAULT_SOURCES: list[dict[str, Any]] = [
    {"url": "https://en.wikipedia.org/wiki/Computational_theory", "category": "computer_science", "subcategory": "theory", "title": "Computational Theory", "expected_content": "theoretical_foundations", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Automata_theory", "category": "computer_science", "subcategory": "theory", "title": "Automata Theory", "expected_content": "formal_systems", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Lambda_calculus", "category": "computer_science", "subcategory": "theory", "title": "Lambda Calculus", "expected_content": "functional_foundations", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Database_index", "category": "computer_science", "subcategory": "databases", "title": "Database Indexing", "expected_content": "query_optimization", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Load_balancing_(computing)", "category": "computer_science", "subcategory": "systems", "title": "Load Balancing", "expected_content": "system_scalability", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Virtual_memory", "category": "computer_science", "subcategory": "systems", "title": "Virtual Memory", "expected_content": "memory_virtualization", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Computer_security", "category": "computer_science", "subcategory": "security", "title": "Computer Security", "expected_content": "security_principles", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/K-means_clustering", "category": "AI_ML", "subcategory": "clustering", "title": "K-means Clustering", "expected_content": "unsupervised_learning", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Cross-validation_(statistics)", "category": "AI_ML", "subcategory": "evaluation", "title": "Cross-Validation", "expected_content": "model_validation", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Autoencoder", "category": "AI_ML", "subcategory": "architectures", "title": "Autoencoders", "expected_content": "representation_learning", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Group_theory", "category": "mathematics", "subcategory": "algebra", "title": "Group Theory", "expected_content": "group_structures", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Complex_analysis", "category": "mathematics", "subcategory": "analysis", "title": "Complex Analysis", "expected_content": "complex_functions", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Multivariate_statistics", "category": "mathematics", "subcategory": "statistics", "title": "Multivariate Statistics", "expected_content": "multidimensional_analysis", "priority": 1},
    {"url": "https://en.wikipedia.org/wiki/Bioinformatics", "category": "science", "subcategory": "computational", "title": "Bioinformatics", "expected_content": "computational_biology", "priority": 2},
    {"url": "https://en.wikipedia.org/wiki/Scientific_method", "category": "education", "subcategory": "methodology", "title": "Scientific Method", "expected_content": "research_methodology", "priority": 2},
    {"url": "https://en.wikipedia.org/wiki/Economics", "category": "business", "subcategory": "economics", "title": "Economics", "expected_content": "economic_principles", "priority": 2},
    {"url": "https://ocw.mit.edu/courses/6-006-introduction-to-algorithms-spring-2020/", "category": "computer_science", "subcategory": "algorithms", "title": "Introduction to Algorithms", "expected_content": "course_material", "priority": 2},
    {"url": "https://docs.python.org/3/tutorial/", "category": "programming", "subcategory": "fundamentals", "title": "Python Tutorial", "expected_content": "language_tutorial", "priority": 3},
]


@dataclass
class SourceCatalog:
    """Ordered, closed list of sources for one acquisition run.

    Example YAML format:
        sources:
          - url: "https://en.wikipedia.org/wiki/Group_theory"
            category: "mathematics"
            subcategory: "algebra"
            title: "Group Theory"
            quality: "high"
            language: "en"
            expected_content: "group_structures"
            priority: 1
    """

    sources: list[SourceEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[SourceEntry]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self.sources)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "SourceCatalog":
        """Load a catalog from a YAML file.

        Args:
            path: Path to the YAML catalog

        Returns:
            SourceCatalog in file order

        Raises:
            CatalogError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.exists():
            raise CatalogError(f"Source catalog not found: {path}", path=str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in source catalog: {e}", path=str(path)) from e

        return cls.from_dict(data or {}, path=str(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str | None = None) -> "SourceCatalog":
        """Create a catalog from a dictionary with a 'sources' list.

        Raises:
            CatalogError: If an entry lacks a url or category
        """
        if not isinstance(data, dict):
            raise CatalogError("Source catalog must be a mapping with a 'sources' list", path=path)

        sources: list[SourceEntry] = []
        for index, raw in enumerate(data.get("sources") or []):
            if not isinstance(raw, dict) or not raw.get("url") or not raw.get("category"):
                raise CatalogError(
                    f"Catalog entry {index} needs at least 'url' and 'category'",
                    path=path,
                )
            try:
                entry = SourceEntry.from_dict(raw)
            except (TypeError, ValueError) as e:
                raise CatalogError(f"Catalog entry {index} is invalid: {e}", path=path) from e
            sources.append(entry)

        return cls(sources=sources)

    @classmethod
    def default(cls) -> "SourceCatalog":
        """Built-in catalog of encyclopedic, academic and documentation sources."""
        return cls.from_dict({"sources": DEFAULT_SOURCES})

    @classmethod
    def get_default(cls) -> "SourceCatalog":
        """Catalog from settings, or the built-in catalog if none is configured."""
        settings = get_settings()
        if settings.catalog_path:
            return cls.from_yaml(settings.catalog_path)
        return cls.default()

    def categories(self) -> dict[str, int]:
        """Number of sources per category, in first-seen order."""
        return dict(Counter(entry.category for entry in self.sources))

    def to_yaml(self) -> str:
        """Export catalog to YAML string."""
        data = {"sources": [entry.to_dict() for entry in self.sources]}
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
