"""URL-level duplicate detection against the processed corpus.

A source is a duplicate when its URL string already appears in any
training file under the corpus's processed directory. Every check
is a full scan, so corpora written by earlier runs are honored
without any index to keep in sync.
"""

from pathlib import Path

from gleaner.core.logging import get_logger

logger = get_logger(__name__)


class DuplicateDetector:
    """Exact URL-string duplicate detection.

    Example:
        >>> detector = DuplicateDetector()
        >>> detector.is_duplicate(Path("./training-content"), url)
        False
    """

    def __init__(
        self,
        processed_dirname: str = "processed",
        pattern: str = "*.txt",
    ) -> None:
        """Initialize DuplicateDetector.

        Args:
            processed_dirname: Directory under the corpus root holding training files
            pattern: Glob selecting the files to scan
        """
        self.processed_dirname = processed_dirname
        self.pattern = pattern

    def is_duplicate(self, corpus_root: Path | str, url: str) -> bool:
        """Check whether url was already acquired into the corpus.

        Unreadable files are skipped. A missing processed directory
        means nothing was acquired yet.

        Args:
            corpus_root: Root directory of the corpus
            url: Source URL to look for

        Returns:
            True if any training file contains the literal URL
        """
        processed = Path(corpus_root) / self.processed_dirname
        if not processed.is_dir():
            return False

        for path in sorted(processed.glob(self.pattern)):
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug(f"Skipping unreadable file {path}: {e}")
                continue
            if url in content:
                logger.debug(f"{url} already present in {path.name}")
                return True

        return False
