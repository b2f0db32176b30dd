"""TF-IDF vectorization over a per-query document batch.

Every function here is pure: inputs are never mutated and each call returns
fresh read-only mappings, so concurrent queries need no locking. Vectors are
only comparable within a single ``fit_tfidf`` call.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
import math
from types import MappingProxyType

from tabular_search.search.analyzers import tokenize


TermVector = Mapping[str, float]


def term_frequencies(terms: Sequence[str]) -> dict[str, float]:
    """Return count / length for each term; empty input yields an empty map."""

    if not terms:
        return {}
    total = len(terms)
    return {term: count / total for term, count in Counter(terms).items()}


def document_frequencies(term_sets: Iterable[Iterable[str]]) -> dict[str, int]:
    """Count the documents in which each term appears at least once."""

    doc_freq: Counter[str] = Counter()
    for terms in term_sets:
        doc_freq.update(set(terms))
    return dict(doc_freq)


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ln(total_docs / doc_freq), with doc_freq floored at 1."""

    if total_docs <= 0:
        return 0.0
    return math.log(total_docs / max(doc_freq, 1))


def fit_tfidf(
    documents: Sequence[str],
    analyzer: Callable[[str], list[str]] | None = None,
) -> list[TermVector]:
    """Fit TF-IDF over ``documents`` and return one vector per document.

    Args:
        documents: Document texts; the query is expected to be one of them.
        analyzer: Tokenizer to use. Defaults to the expanding analyzer.

    Returns:
        Read-only term vectors aligned with ``documents``. A document with
        no tokens gets an empty vector.
    """

    analyze = analyzer or tokenize
    tokenized = [analyze(document) for document in documents]
    doc_freq = document_frequencies(tokenized)
    total_docs = len(documents)
    idf = {term: calculate_idf(freq, total_docs) for term, freq in doc_freq.items()}

    vectors: list[TermVector] = []
    for terms in tokenized:
        tf = term_frequencies(terms)
        vectors.append(MappingProxyType({term: weight * idf[term] for term, weight in tf.items()}))
    return vectors
