"""On-disk training corpus.

Layout under the corpus root:

    <root>/<category>/<subcategory>/<id>_raw.<ext>
    <root>/<category>/<subcategory>/<id>_text.txt
    <root>/<category>/<subcategory>/<id>_metadata.json
    <root>/processed/<category>_<title>_<id8>_training.txt
    <root>/acquisition_summary.json

The processed directory is what duplicate detection scans, so a
training file is only left behind when the whole document was
written.
"""

import json
import os
from pathlib import Path

from gleaner.core.config import GleanerSettings, get_settings
from gleaner.core.exceptions import CorpusRootError, PersistenceError
from gleaner.core.logging import get_logger
from gleaner.core.types import Document, RunSummary

logger = get_logger(__name__)

PROCESSED_DIRNAME = "processed"

# Content type prefix -> raw file extension
RAW_EXTENSIONS = {
    "text/plain": "txt",
    "application/xml": "xml",
    "text/xml": "xml",
    "application/json": "json",
}
DEFAULT_RAW_EXTENSION = "html"


def raw_extension(content_type: str) -> str:
    """File extension for raw content of the given content type."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return RAW_EXTENSIONS.get(media_type, DEFAULT_RAW_EXTENSION)


def training_header(document: Document) -> str:
    """Header block written before the clean text of a training file."""
    source = document.source
    return (
        f"Title: {source.title}\n"
        f"Category: {source.category}/{source.subcategory}\n"
        f"URL: {source.url}\n"
        f"Quality: {document.quality_score:.2f}\n"
        f"Words: {document.word_count}\n"
        f"Priority: {source.priority}\n"
        f"Scraped: {document.fetched_at.isoformat()}\n"
        "\n"
    )


class CorpusStore:
    """Writes accepted documents and run summaries under a corpus root.

    Example:
        >>> store = CorpusStore(Path("./training-content"))
        >>> store.ensure_root()
        >>> paths = store.persist(document)
        >>> store.current_size()
        48213
    """

    def __init__(
        self,
        root: Path | str | None = None,
        summary_filename: str | None = None,
        config: GleanerSettings | None = None,
    ) -> None:
        """Initialize CorpusStore.

        Args:
            root: Corpus root directory (defaults to the configured root)
            summary_filename: Name of the end-of-run summary file
            config: Gleaner settings (uses defaults if not provided)
        """
        self.config = config or get_settings()
        self.root = Path(root) if root is not None else Path(self.config.corpus_root)
        self.summary_filename = summary_filename or self.config.summary_filename

    @property
    def processed_dir(self) -> Path:
        return self.root / PROCESSED_DIRNAME

    @property
    def summary_path(self) -> Path:
        return self.root / self.summary_filename

    def ensure_root(self) -> None:
        """Create the corpus root if needed.

        Raises:
            CorpusRootError: If the root cannot be created or is not a directory
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CorpusRootError(
                f"Cannot create corpus root: {e}", path=str(self.root)
            ) from e
        if not os.access(self.root, os.R_OK | os.W_OK):
            raise CorpusRootError("Corpus root is not readable and writable", path=str(self.root))

    def current_size(self) -> int:
        """Total size in bytes of every file under the root (0 if missing)."""
        total = 0
        for dirpath, _, filenames in os.walk(self.root):
            for name in filenames:
                try:
                    total += os.path.getsize(os.path.join(dirpath, name))
                except OSError:
                    # Vanished between listing and stat
                    continue
        return total

    def training_filename(self, document: Document) -> str:
        """Name of the training file for a document."""
        source = document.source
        title = source.title.replace(" ", "_").replace("/", "_")
        return f"{source.category}_{title}_{document.id[:8]}_training.txt"

    def persist(self, document: Document) -> list[Path]:
        """Write every artifact of an accepted document.

        On failure the artifacts written so far are removed.

        Args:
            document: The accepted document

        Returns:
            Paths written, training file last

        Raises:
            PersistenceError: On any filesystem error
        """
        source = document.source
        directory = self.root / source.category / source.subcategory
        ext = raw_extension(document.metadata.get("content_type", ""))

        raw = document.raw_body
        if raw is None:
            raw = document.raw_content.encode("utf-8")

        # The raw artifact keeps the fetched bytes; everything else is UTF-8 text
        artifacts = [
            (directory / f"{document.id}_raw.{ext}", raw),
            (directory / f"{document.id}_text.txt", document.clean_text.encode("utf-8")),
            (
                directory / f"{document.id}_metadata.json",
                json.dumps(
                    document.to_dict(), indent=2, ensure_ascii=False, default=str
                ).encode("utf-8"),
            ),
            (
                self.processed_dir / self.training_filename(document),
                (training_header(document) + document.clean_text).encode("utf-8"),
            ),
        ]

        written: list[Path] = []
        try:
            directory.mkdir(parents=True, exist_ok=True)
            self.processed_dir.mkdir(parents=True, exist_ok=True)
            for path, content in artifacts:
                path.write_bytes(content)
                written.append(path)
        except OSError as e:
            failed = artifacts[len(written)][0]
            self._remove(written + [failed])
            raise PersistenceError(f"Failed to write {failed.name}: {e}", path=str(failed)) from e

        logger.debug(f"Persisted {len(written)} files for {source.url}")
        return written

    def _remove(self, paths: list[Path]) -> None:
        """Best-effort removal of partially written artifacts."""
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove partial artifact {path}: {e}")

    def write_summary(self, summary: RunSummary) -> Path:
        """Write the end-of-run summary file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        path = self.summary_path
        try:
            path.write_text(
                json.dumps(summary.to_dict(), indent=2, ensure_ascii=False, default=str),
                encoding="utf-8",
            )
        except OSError as e:
            raise PersistenceError(f"Failed to write summary: {e}", path=str(path)) from e
        logger.info(f"Summary written to {path}")
        return path

    def read_summary(self) -> dict | None:
        """Load the last summary file, if any."""
        if not self.summary_path.is_file():
            return None
        try:
            return json.loads(self.summary_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable summary {self.summary_path}: {e}")
            return None
