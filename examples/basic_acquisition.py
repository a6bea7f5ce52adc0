"""Basic acquisition example.

Demonstrates how to run AcquisitionOrchestrator over a small catalog
and inspect the run summary.
"""

import asyncio
from pathlib import Path

from gleaner.acquire.orchestrator import AcquisitionOrchestrator
from gleaner.core.catalog import SourceCatalog
from gleaner.core.config import configure


async def main():
    # Small budget so the example finishes quickly
    settings = configure(
        corpus_root=Path("./example-corpus"),
        target_size_bytes=5 * 1024 * 1024,
        quality_threshold=0.6,
    )

    catalog = SourceCatalog.from_yaml(Path(__file__).parent / "sources.yaml")

    print("Gleaner Acquisition Example")
    print("=" * 50)
    print(f"Sources: {len(catalog)}")
    for category, count in catalog.categories().items():
        print(f"  {category}: {count}")
    print()

    orchestrator = AcquisitionOrchestrator(config=settings)
    summary = await orchestrator.run(catalog)

    print(summary.summary())
    print()

    # Show accepted documents
    for document in orchestrator.statistics.documents:
        print(f"  [{document.quality_score:.2f}] {document.source.title}")
        print(f"         {document.word_count} words from {document.source.url}")

    print(f"\nSummary written to {settings.summary_path}")


if __name__ == "__main__":
    asyncio.run(main())
