"""Gleaner CLI application.

This module provides the command-line interface for Gleaner,
built with Typer.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from gleaner._version import __version__

app = typer.Typer(
    name="gleaner",
    help="Polite, quality-filtered training corpus acquisition",
    no_args_is_help=True,
)
console = Console()

MB = 1024 * 1024


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Gleaner v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Gleaner - polite, quality-filtered training corpus acquisition.

    Check. Fetch. Score. Keep.
    """
    pass


def _load_catalog(path: Path | None):
    """Load the catalog at path, the configured catalog, or the built-in one."""
    from gleaner.core.catalog import SourceCatalog
    from gleaner.core.exceptions import CatalogError

    try:
        if path is not None:
            return SourceCatalog.from_yaml(path)
        return SourceCatalog.get_default()
    except CatalogError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def run(
    catalog: Annotated[Optional[Path], typer.Option(help="Source catalog YAML file")] = None,
    root: Annotated[Optional[Path], typer.Option(help="Corpus root directory")] = None,
    target_mb: Annotated[Optional[int], typer.Option(help="Target corpus size in MB")] = None,
    threshold: Annotated[Optional[float], typer.Option(help="Minimum quality score")] = None,
    delay: Annotated[Optional[float], typer.Option(help="Seconds to wait between fetches")] = None,
) -> None:
    """Acquire sources from the catalog until the target size is reached."""
    from gleaner.acquire.orchestrator import AcquisitionOrchestrator
    from gleaner.core.config import configure
    from gleaner.core.logging import setup_logging
    from gleaner.core.exceptions import CorpusRootError, PersistenceError

    overrides = {
        "corpus_root": root,
        "target_size_bytes": target_mb * MB if target_mb is not None else None,
        "quality_threshold": threshold,
        "request_delay": delay,
    }
    settings = configure(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(settings.log_level, settings.log_format)
    sources = _load_catalog(catalog)

    console.print(
        f"[blue]Acquiring {len(sources)} sources into {settings.corpus_root} "
        f"(target {settings.target_size_bytes / MB:.1f} MB)...[/blue]"
    )

    orchestrator = AcquisitionOrchestrator(config=settings)
    try:
        summary = orchestrator.run_sync(sources)
    except (CorpusRootError, PersistenceError) as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    # Display results
    table = Table(title="Acquisition Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    counts = summary.outcome_counts
    table.add_row("Sources Processed", str(summary.processed))
    table.add_row("Accepted", str(counts.get("accepted", 0)))
    table.add_row("Robots Blocked", str(counts.get("permission_denied", 0)))
    table.add_row("Duplicates Skipped", str(counts.get("duplicate", 0)))
    table.add_row("Fetch Failed", str(counts.get("fetch_failed", 0)))
    table.add_row("Quality Filtered", str(counts.get("quality_rejected", 0)))
    table.add_row("Total Words", str(summary.total_words))
    table.add_row("Avg Quality", f"{summary.avg_quality:.2f}")
    table.add_row("Corpus Size", f"{summary.final_size_bytes / MB:.2f} MB")
    table.add_row("Completion", f"{summary.completion:.1%}")

    console.print(table)

    if summary.categories:
        console.print("\n[yellow]Accepted by Category:[/yellow]")
        for category, stats in sorted(summary.categories.items()):
            console.print(
                f"  {category}: {stats['count']} documents, "
                f"{stats['total_words']} words, avg quality {stats['avg_quality']:.2f}"
            )

    if summary.target_reached:
        console.print("\n[green]Target size reached.[/green]")


@app.command()
def status(
    root: Annotated[Optional[Path], typer.Option(help="Corpus root directory")] = None,
) -> None:
    """Show corpus size and progress toward the target."""
    from gleaner.core.config import get_settings
    from gleaner.ingest.corpus import CorpusStore

    settings = get_settings()
    store = CorpusStore(root=root, config=settings)
    size = store.current_size()
    target = settings.target_size_bytes

    table = Table(title=f"Corpus Status: {store.root}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Current Size", f"{size / MB:.2f} MB")
    table.add_row("Target Size", f"{target / MB:.2f} MB")
    table.add_row("Progress", f"{size / target:.1%}")
    if store.processed_dir.is_dir():
        table.add_row("Training Files", str(len(list(store.processed_dir.glob("*.txt")))))

    console.print(table)

    last = store.read_summary()
    if last:
        results = last.get("final_results", {})
        session = last.get("session", {})
        console.print(
            f"\n[yellow]Last run[/yellow] ({session.get('finished_at', 'unknown')}): "
            f"{results.get('total_documents', 0)} documents, "
            f"avg quality {results.get('average_quality', 0.0):.2f}"
        )


@app.command()
def score(
    path: Annotated[Path, typer.Argument(help="Local HTML or text file to score")],
    url: Annotated[Optional[str], typer.Option(help="Source URL for the domain bonus")] = None,
) -> None:
    """Score a local file with the extractor and quality scorer."""
    from gleaner.acquire.extract import TextExtractor
    from gleaner.core.config import get_settings
    from gleaner.core.types import SourceEntry
    from gleaner.validate.quality import QualityScorer

    if not path.is_file():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)

    raw = path.read_text(encoding="utf-8", errors="replace")
    if path.suffix.lower() in (".html", ".htm", ".xhtml", ".xml") or raw.lstrip().startswith("<"):
        text = TextExtractor().clean(raw)
    else:
        text = " ".join(raw.split())

    source = SourceEntry(
        url=url or path.resolve().as_uri(),
        category="local",
        subcategory="general",
        title=path.stem,
    )
    breakdown = QualityScorer().breakdown(text, source)
    threshold = get_settings().quality_threshold

    table = Table(title=f"Quality Breakdown: {path.name}")
    table.add_column("Component", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Detail")

    table.add_row("Length", f"{breakdown.length:.3f}", f"{breakdown.word_count} words")
    table.add_row("Keywords", f"{breakdown.keywords:.3f}", ", ".join(breakdown.keyword_hits))
    table.add_row("Domain", f"{breakdown.domain:.3f}", breakdown.domain_class or "-")
    table.add_row("Technical", f"{breakdown.technical:.3f}", ", ".join(breakdown.technical_hits))
    table.add_row("Total", f"{breakdown.total:.3f}", f"threshold {threshold}")

    console.print(table)

    if breakdown.total >= threshold:
        console.print("[green]Would be accepted.[/green]")
    else:
        console.print("[yellow]Would be rejected.[/yellow]")


@app.command()
def catalog(
    path: Annotated[Optional[Path], typer.Option("--catalog", help="Source catalog YAML file")] = None,
) -> None:
    """Show the acquisition plan per category."""
    sources = _load_catalog(path)

    table = Table(title="Acquisition Plan")
    table.add_column("Category", style="cyan")
    table.add_column("Sources", style="green")

    for category, count in sources.categories().items():
        table.add_row(category, str(count))
    table.add_row("Total", str(len(sources)))

    console.print(table)


if __name__ == "__main__":
    app()
