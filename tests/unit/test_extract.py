"""Tests for markup to text extraction."""

from unittest.mock import patch

from gleaner.acquire.extract import TextExtractor

PAGE = """
<html>
  <head><title>Graph theory</title><style>body { color: red; }</style></head>
  <body>
    <header>Site header with a long navigation label</header>
    <nav><a href="/">Main page</a> <a href="/random">Random article</a></nav>
    <div class="infobox">Infobox content that should not survive extraction</div>
    <h1>Graph theory</h1>
    <p>Graph theory is the study of graphs,   which are mathematical
       structures used to model pairwise relations.</p>
    <p>Short</p>
    <table class="navbox"><tr><td>Navigation box entries for related topics</td></tr></table>
    <p>A graph is made up of vertices connected by edges.</p>
    <script>var tracking = "this script text must be removed";</script>
    <aside>Related content in a sidebar element</aside>
    <footer>Footer text with copyright and licensing details</footer>
  </body>
</html>
"""


class TestTextExtractor:
    """Tests for the TextExtractor class."""

    def test_removes_non_content(self, settings):
        """Test boilerplate regions are dropped."""
        text = TextExtractor(config=settings).clean(PAGE)

        assert "Graph theory is the study of graphs" in text
        assert "A graph is made up of vertices connected by edges." in text
        for removed in ("Site header", "Random article", "Infobox", "Navigation box",
                        "tracking", "sidebar element", "copyright", "color: red"):
            assert removed not in text

    def test_collapses_whitespace(self, settings):
        text = TextExtractor(config=settings).clean(PAGE)
        assert "graphs, which are mathematical structures" in text
        assert "  " not in text
        assert "\n" not in text

    def test_drops_short_lines(self, settings):
        """Test lines of ten characters or fewer are dropped."""
        text = TextExtractor(config=settings).clean(
            "<body><p>Short</p><p>Exactly 10</p><p>Eleven chars</p></body>"
        )
        assert text == "Eleven chars"

    def test_joins_lines_with_spaces(self, settings):
        text = TextExtractor(config=settings).clean(
            "<body><p>First paragraph here.</p><p>Second paragraph here.</p></body>"
        )
        assert text == "First paragraph here. Second paragraph here."

    def test_custom_min_line_length(self, settings):
        text = TextExtractor(config=settings, min_line_length=0).clean("<p>Short</p><p>Tiny</p>")
        assert text == "Short Tiny"

    def test_document_without_body(self, settings):
        text = TextExtractor(config=settings).clean("<div>Fragment without a body element</div>")
        assert text == "Fragment without a body element"

    def test_accepts_bytes(self, settings):
        text = TextExtractor(config=settings).clean("<p>Café culture in the city</p>".encode())
        assert text == "Café culture in the city"

    def test_empty_input(self, settings):
        assert TextExtractor(config=settings).clean("") == ""

    def test_fallback_on_parser_failure(self, settings):
        """Test tag stripping takes over when structured parsing fails."""
        with patch("gleaner.acquire.extract.BeautifulSoup", side_effect=RuntimeError("boom")):
            text = TextExtractor(config=settings).clean("<p>Hi</p>\n\n<p>there   friend</p>")

        assert text == "Hi there friend"

    def test_malformed_markup(self, settings):
        """Test unbalanced markup still yields its visible text."""
        text = TextExtractor(config=settings).clean("<div><p>Unclosed paragraph <b>with bold text</div></span>")
        assert "Unclosed paragraph with bold text" in text

    def test_short_text_only_falls_back(self, settings):
        """Test a page whose lines are all filtered out keeps its text."""
        text = TextExtractor(config=settings).clean("<p>Hi</p><p>there</p>")
        assert text == "Hi there"

    def test_strip_tags(self):
        assert TextExtractor.strip_tags("<b>bold</b>  <i>text</i>") == "bold text"
