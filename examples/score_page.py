"""Quality scoring example.

Shows how the extractor and scorer judge a page before any
acquisition run, component by component.
"""

from gleaner.acquire.extract import TextExtractor
from gleaner.core.types import SourceEntry
from gleaner.validate.quality import Lexicon, QualityScorer

PAGE = """
<html><body>
  <nav>Home | About | Contact</nav>
  <h1>Dynamic programming</h1>
  <p>Dynamic programming is an optimization method and an algorithmic
     approach for solving problems with overlapping subproblems.</p>
  <p>The technique stores intermediate results to avoid recomputation,
     trading memory for improved computational efficiency.</p>
  <footer>All rights reserved</footer>
</body></html>
"""


def main():
    source = SourceEntry(
        url="https://ocw.mit.edu/courses/dynamic-programming/",
        category="computer_science",
        subcategory="algorithms",
        title="Dynamic Programming",
    )

    text = TextExtractor().clean(PAGE)
    print(f"Clean text ({len(text.split())} words):")
    print(f"  {text}")
    print()

    for name, scorer in [
        ("default lexicon", QualityScorer()),
        ("biology lexicon", QualityScorer(lexicon=Lexicon(keywords=("enzyme", "protein", "cell")))),
    ]:
        breakdown = scorer.breakdown(text, source)
        print(f"Scoring with {name}:")
        print(f"  length:    {breakdown.length:.3f}")
        print(f"  keywords:  {breakdown.keywords:.3f} {list(breakdown.keyword_hits)}")
        print(f"  domain:    {breakdown.domain:.3f} ({breakdown.domain_class})")
        print(f"  technical: {breakdown.technical:.3f} {list(breakdown.technical_hits)}")
        print(f"  total:     {breakdown.total:.3f}")
        print()


if __name__ == "__main__":
    main()
