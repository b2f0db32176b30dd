"""Query term highlighting for result presentation.

Query terms are wrapped wherever they appear as whole words, ignoring case.
All terms go into one alternation, longest first, and the text is scanned
once, so overlapping terms resolve to the longest match and the inserted
markup is never matched again.
"""

from __future__ import annotations

from collections.abc import Callable
import re
from typing import Literal

from tabular_search.search.analyzers import tokenize


HighlightStyle = Literal["html", "plain"]

HIGHLIGHT_MARKERS: dict[str, tuple[str, str]] = {
    "html": ("<mark>", "</mark>"),
    "plain": ("[[", "]]"),
}


def highlight_terms(text: str, terms: list[str], style: HighlightStyle = "html") -> str:
    """Wrap whole-word, case-insensitive occurrences of each term."""

    if not text or not terms:
        return text

    ordered = sorted(dict.fromkeys(term for term in terms if term), key=len, reverse=True)
    if not ordered:
        return text

    opener, closer = HIGHLIGHT_MARKERS[style]
    alternation = "|".join(re.escape(term) for term in ordered)
    pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
    return pattern.sub(lambda match: f"{opener}{match.group(0)}{closer}", text)


def highlight(
    text: str,
    query: str,
    style: HighlightStyle = "html",
    analyzer: Callable[[str], list[str]] | None = None,
) -> str:
    """Highlight the query's terms inside ``text``.

    Args:
        text: Field text to annotate.
        query: Raw query string; tokenized without synonym expansion.
        style: "html" for <mark>term</mark> or "plain" for [[term]].
        analyzer: Non-expanding analyzer to use instead of the default.

    Returns:
        The annotated text, or ``text`` unchanged when either side is empty.
    """
    if not text or not query:
        return text

    if analyzer is None:
        terms = tokenize(query, expand=False)
    else:
        terms = analyzer(query)
    return highlight_terms(text, terms, style=style)
