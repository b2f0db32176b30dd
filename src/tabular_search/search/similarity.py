"""Similarity scoring over sparse term vectors and raw text."""

from __future__ import annotations

from collections.abc import Mapping
import math

from tabular_search.search.analyzers import ScriptAwareAnalyzer, tokenize
from tabular_search.search.fuzzy import count_fuzzy_matches


def cosine_similarity(vec1: Mapping[str, float], vec2: Mapping[str, float]) -> float:
    """Compute cosine similarity between two sparse vectors.

    Terms missing from one vector contribute zero. Returns 0.0 when either
    vector has zero magnitude.
    """
    if len(vec1) > len(vec2):
        vec1, vec2 = vec2, vec1

    dot_product = sum(weight * vec2.get(term, 0.0) for term, weight in vec1.items())
    magnitude1 = math.sqrt(sum(weight * weight for weight in vec1.values()))
    magnitude2 = math.sqrt(sum(weight * weight for weight in vec2.values()))

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    return dot_product / (magnitude1 * magnitude2)


def fuzzy_match_score(
    text: str,
    query: str,
    *,
    max_distance: int = 2,
    analyzer: ScriptAwareAnalyzer | None = None,
) -> float:
    """Score how many text terms sit within a few edits of each query term.

    Both sides are tokenized without expansion. The score is the number of
    (query term, text term) pairs within ``max_distance`` divided by the
    query term count, so it exceeds 1.0 when a query term matches several
    text terms.
    """
    if analyzer is None:
        text_terms = tokenize(text, expand=False)
        query_terms = tokenize(query, expand=False)
    else:
        text_terms = analyzer(text)
        query_terms = analyzer(query)

    matches = sum(count_fuzzy_matches(term, text_terms, max_distance) for term in query_terms)
    return matches / max(len(query_terms), 1)


def blend_scores(cosine: float, fuzzy: float, fuzzy_weight: float = 0.3) -> float:
    """Raise the cosine score to the weighted fuzzy score when that is higher."""
    return max(cosine, fuzzy * fuzzy_weight)
