"""Ranking pipeline: weighted documents, TF-IDF, scoring, filtering, highlighting.

One call runs ``BuildDocuments -> Vectorize -> Score -> Filter -> Highlight
-> Sort+Truncate`` over a corpus snapshot. Nothing is cached between calls:
the corpus is re-tokenized and re-vectorized together with the query every
time, so the engine can be shared freely between threads as long as callers
do not mutate the rows during a query.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache
import logging
import time
from typing import Any

from tabular_search.config import Settings
from tabular_search.domain.search import (
    ParsedQuery,
    Row,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchStats,
    SearchWarning,
)
from tabular_search.observability.metrics import SEARCH_LATENCY, SEARCH_REQUESTS, SEARCH_RESULTS, track_latency
from tabular_search.observability.tracing import create_span
from tabular_search.search.analyzers import ScriptAwareAnalyzer, detect_language
from tabular_search.search.fields import FieldResolver, build_document
from tabular_search.search.highlight import highlight
from tabular_search.search.query_parser import matches_query, parse_query
from tabular_search.search.similarity import blend_scores, cosine_similarity, fuzzy_match_score
from tabular_search.search.vectorizer import fit_tfidf


logger = logging.getLogger(__name__)

OptionsInput = SearchOptions | Mapping[str, Any] | None


class RowSearchEngine:
    """Rank rows of a corpus against a free-text or boolean query."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        synonyms: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.index_analyzer = ScriptAwareAnalyzer.from_settings(self.settings, expand=True, synonyms=synonyms)
        self.raw_analyzer = ScriptAwareAnalyzer.from_settings(self.settings, expand=False)

    def search(
        self,
        corpus: Sequence[Row],
        query: str,
        max_results: int | None = None,
        options: OptionsInput = None,
    ) -> list[SearchResult]:
        """Return the best matching rows, highest score first."""

        return self.search_with_stats(corpus, query, max_results, options).results

    def search_with_stats(
        self,
        corpus: Sequence[Row],
        query: str,
        max_results: int | None = None,
        options: OptionsInput = None,
    ) -> SearchResponse:
        """Run the ranking pipeline and report per-query statistics.

        Args:
            corpus: Rows to rank; read but never modified.
            query: Free-text or boolean query.
            max_results: Result cap; defaults to ``Settings.search_max_results``.
            options: ``SearchOptions`` or a mapping accepted by it.

        Returns:
            SearchResponse with ranked results and diagnostics.
        """
        search_options = coerce_options(options)
        limit = self.settings.search_max_results if max_results is None else max_results

        with (
            create_span(
                "tabular_search.search",
                attributes={"search.rows": len(corpus), "search.fuzzy": search_options.fuzzy_search},
            ) as span,
            track_latency(SEARCH_LATENCY),
        ):
            response = self._run(corpus, query, limit, search_options)
            span.set_attribute("search.matches", response.stats.matches_found)

        outcome = response.stats.warning.value if response.stats.warning else "ok"
        SEARCH_REQUESTS.labels(outcome=outcome).inc()
        SEARCH_RESULTS.observe(len(response.results))
        return response

    def _run(
        self,
        corpus: Sequence[Row],
        query: str,
        limit: int,
        options: SearchOptions,
    ) -> SearchResponse:
        start = time.perf_counter()
        rows_total = len(corpus)

        if not rows_total or not query or not query.strip():
            logger.debug("Search skipped: empty corpus or blank query")
            return _response([], start, rows_total=rows_total, warning=SearchWarning.EMPTY_INPUT)

        candidates = self._prefilter(corpus, options.language)
        if not candidates:
            logger.debug("Language filter %r left no rows out of %d", options.language, rows_total)
            return _response([], start, rows_total=rows_total, warning=SearchWarning.NO_MATCHES)

        parsed = parse_query(query)
        documents = [self._build_document(row, options) for _, row in candidates]
        vectors = fit_tfidf([*documents, query], analyzer=self.index_analyzer)
        query_vector = vectors[-1]
        degenerate = sum(1 for vector in vectors[:-1] if not vector)

        if not query_vector:
            logger.debug("Query %r produced no index terms", query)
            return _response(
                [],
                start,
                rows_total=rows_total,
                rows_considered=len(candidates),
                degenerate_documents=degenerate,
                warning=SearchWarning.DEGENERATE_VECTOR,
            )

        results: list[SearchResult] = []
        rejected = 0
        for (index, row), document, vector in zip(candidates, documents, vectors):
            score = cosine_similarity(query_vector, vector)
            if options.fuzzy_search:
                fuzzy = fuzzy_match_score(
                    document,
                    query,
                    max_distance=self.settings.fuzzy_max_edit_distance,
                    analyzer=self.raw_analyzer,
                )
                score = blend_scores(score, fuzzy, self.settings.fuzzy_weight)

            if not self._passes_filter(parsed, row, options):
                rejected += 1
                continue
            if score <= self.settings.search_min_score:
                continue

            resolver = FieldResolver(row)
            results.append(
                SearchResult(
                    row=dict(row),
                    index=index,
                    score=score,
                    highlighted_title=self._highlight(resolver.title, query),
                    highlighted_description=self._highlight(resolver.description, query),
                )
            )

        results.sort(key=lambda result: result.score, reverse=True)
        ranked = results[: max(limit, 0)]

        logger.debug(
            "Search completed: %d matches from %d rows (%d rejected by filter, %d empty documents, fuzzy=%s)",
            len(results),
            len(candidates),
            rejected,
            degenerate,
            options.fuzzy_search,
            extra={
                "query": query,
                "considered": len(candidates),
                "rejected": rejected,
                "degenerate": degenerate,
                "matches": len(results),
                "fuzzy": options.fuzzy_search,
            },
        )

        return _response(
            ranked,
            start,
            rows_total=rows_total,
            rows_considered=len(candidates),
            rows_rejected=rejected,
            degenerate_documents=degenerate,
            matches_found=len(results),
            warning=None if results else SearchWarning.NO_MATCHES,
        )

    def _prefilter(self, corpus: Sequence[Row], language: str | None) -> list[tuple[int, Row]]:
        if language is None:
            return list(enumerate(corpus))
        kept: list[tuple[int, Row]] = []
        for index, row in enumerate(corpus):
            resolver = FieldResolver(row)
            if detect_language(resolver.title or resolver.description) == language:
                kept.append((index, row))
        return kept

    def _build_document(self, row: Row, options: SearchOptions) -> str:
        return build_document(
            row,
            search_columns=options.search_columns,
            column_weights=options.column_weights,
            default_weight=self.settings.default_column_weight,
            default_title_weight=self.settings.default_title_weight,
        )

    @staticmethod
    def _passes_filter(parsed: ParsedQuery, row: Row, options: SearchOptions) -> bool:
        # Fuzzy free-text queries skip the substring gate so misspelled terms can still match.
        if options.fuzzy_search and not parsed.is_structured:
            return True
        return matches_query(parsed, row)

    def _highlight(self, text: str, query: str) -> str:
        return highlight(text, query, style=self.settings.highlight_style, analyzer=self.raw_analyzer)


def coerce_options(options: OptionsInput) -> SearchOptions:
    """Accept a SearchOptions instance, a plain mapping, or None."""

    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.model_validate(dict(options))


def _response(
    results: list[SearchResult],
    start: float,
    *,
    warning: SearchWarning | None,
    **counts: int,
) -> SearchResponse:
    stats = SearchStats(
        search_time=time.perf_counter() - start,
        warning=warning,
        **counts,
    )
    return SearchResponse(results=results, stats=stats)


@lru_cache(maxsize=1)
def get_default_engine() -> RowSearchEngine:
    """Engine built from environment settings, created on first use."""

    return RowSearchEngine()


def search(
    corpus: Sequence[Row],
    query: str,
    max_results: int | None = None,
    options: OptionsInput = None,
) -> list[SearchResult]:
    """Rank ``corpus`` against ``query`` with the default engine.

    Examples:
        >>> rows = [{"title": "Login bug", "description": "Cannot authenticate"},
        ...         {"title": "UI polish", "description": "Button color"}]
        >>> [result.index for result in search(rows, "login")]
        [0]
    """

    return get_default_engine().search(corpus, query, max_results, options)
