"""Markup to plain text extraction.

The primary path parses the document with BeautifulSoup, drops
non-content regions and short noise lines. If parsing fails, or
leaves no text at all, the extractor falls back to stripping tags
with a regular expression, so clean() always returns a result.
"""

import re

from bs4 import BeautifulSoup, NavigableString

from gleaner.core.config import GleanerSettings, get_settings
from gleaner.core.logging import get_logger

logger = get_logger(__name__)

REMOVED_SELECTOR = (
    "script, style, noscript, nav, header, footer, aside, .navbox, .infobox, .sidebar"
)

# Elements whose boundaries end a line of text
BLOCK_TAGS = [
    "address", "article", "blockquote", "br", "caption", "dd", "div", "dl",
    "dt", "figcaption", "figure", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "hr", "li", "main", "ol", "p", "pre", "section", "table", "td", "th",
    "tr", "ul",
]

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


class TextExtractor:
    """Converts raw markup into normalized, boilerplate-stripped text.

    Example:
        >>> extractor = TextExtractor()
        >>> extractor.clean("<html><body><p>Some long paragraph text.</p></body></html>")
        'Some long paragraph text.'
    """

    def __init__(
        self,
        config: GleanerSettings | None = None,
        min_line_length: int | None = None,
        parser: str = "html.parser",
    ) -> None:
        """Initialize TextExtractor.

        Args:
            config: Gleaner settings (uses defaults if not provided)
            min_line_length: Lines of this length or shorter are dropped
            parser: BeautifulSoup tree builder
        """
        self.config = config or get_settings()
        self.min_line_length = (
            min_line_length if min_line_length is not None else self.config.min_line_length
        )
        self.parser = parser

    def clean(self, markup: str | bytes) -> str:
        """Extract clean text from markup. Never raises.

        Args:
            markup: Raw HTML/XML as fetched

        Returns:
            Normalized text, lines joined by single spaces
        """
        if isinstance(markup, bytes):
            markup = markup.decode("utf-8", errors="replace")

        try:
            text = self._extract_structured(markup)
        except Exception as e:
            logger.debug(f"Structured extraction failed, using tag stripping: {e}")
            return self.strip_tags(markup)

        # Nothing survived the filters; keep whatever text the markup has
        return text or self.strip_tags(markup)

    def _extract_structured(self, markup: str) -> str:
        soup = BeautifulSoup(markup, self.parser)

        for element in soup.select(REMOVED_SELECTOR):
            # Nested matches are already gone with their ancestor
            if not element.decomposed:
                element.decompose()

        root = soup.body or soup

        # Whitespace inside a text node never ends a line; block boundaries do
        for node in root.find_all(string=True):
            if type(node) is NavigableString:
                node.replace_with(_WHITESPACE.sub(" ", str(node)))
        for tag in root.find_all(BLOCK_TAGS):
            if tag.parent is not None:
                tag.insert_before("\n")
            tag.append("\n")

        lines = (" ".join(line.split()) for line in root.get_text().split("\n"))
        return " ".join(line for line in lines if len(line) > self.min_line_length)

    @staticmethod
    def strip_tags(markup: str) -> str:
        """Fallback extraction: remove tags and collapse whitespace."""
        text = _TAG.sub(" ", markup)
        return _WHITESPACE.sub(" ", text).strip()
