"""In-memory lexical search and ranking over tabular rows."""

from tabular_search.config import Settings
from tabular_search.corpus import ValidationResult, available_columns, combine_datasets, validate_rows
from tabular_search.domain.search import (
    ParsedQuery,
    QueryPredicate,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchStats,
    SearchWarning,
)
from tabular_search.insights import generate_tags, value_distribution
from tabular_search.search.analyzers import tokenize
from tabular_search.search.engine import RowSearchEngine, search
from tabular_search.search.fuzzy import levenshtein_distance
from tabular_search.search.highlight import highlight
from tabular_search.search.query_parser import parse_query
from tabular_search.search.similarity import cosine_similarity
from tabular_search.search.vectorizer import fit_tfidf


__all__ = [
    "ParsedQuery",
    "QueryPredicate",
    "RowSearchEngine",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "SearchWarning",
    "Settings",
    "ValidationResult",
    "available_columns",
    "combine_datasets",
    "cosine_similarity",
    "fit_tfidf",
    "generate_tags",
    "highlight",
    "levenshtein_distance",
    "parse_query",
    "search",
    "tokenize",
    "validate_rows",
    "value_distribution",
]
