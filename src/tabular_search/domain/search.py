"""Domain models for row search.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- Domain logic lives in domain layer
- No infrastructure dependencies

Options accept both snake_case names and the camelCase keys used by
front-end callers (``columnWeights``, ``searchColumns``, ``fuzzySearch``).
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Row = Mapping[str, str]
BooleanOperator = Literal["AND", "OR", "NOT"]


class SearchOptions(BaseModel):
    """Value object carrying per-query ranking options."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    column_weights: dict[str, float] = Field(default_factory=dict)
    search_columns: tuple[str, ...] = ()
    fuzzy_search: bool = False
    language: Literal["ko", "en"] | None = None


class QueryPredicate(BaseModel):
    """One term slot of a parsed query.

    ``field`` is None for free-text predicates that match against the
    title and description of a row.
    """

    model_config = ConfigDict(frozen=True)

    field: str | None = None
    value: str


class ParsedQuery(BaseModel):
    """Predicates and the connectives between them, in query order."""

    model_config = ConfigDict(frozen=True)

    predicates: tuple[QueryPredicate, ...] = ()
    operators: tuple[BooleanOperator, ...] = ()

    @property
    def is_structured(self) -> bool:
        """True when the query uses a connective or a field-scoped term."""
        return bool(self.operators) or any(predicate.field for predicate in self.predicates)


class SearchResult(BaseModel):
    """Value object for a single ranked row."""

    model_config = ConfigDict(frozen=True)

    row: dict[str, Any]
    index: int
    score: float
    highlighted_title: str = ""
    highlighted_description: str = ""


class SearchWarning(str, Enum):
    """Non-fatal conditions observed while answering a query."""

    EMPTY_INPUT = "empty_input"
    DEGENERATE_VECTOR = "degenerate_vector"
    NO_MATCHES = "no_matches"


class SearchStats(BaseModel):
    """Performance and debug information for a search operation."""

    model_config = ConfigDict(frozen=True)

    rows_total: int = 0
    rows_considered: int = 0
    rows_rejected: int = 0
    degenerate_documents: int = 0
    matches_found: int = 0
    search_time: float = 0.0
    warning: SearchWarning | None = None


class SearchResponse(BaseModel):
    """Value object for a complete search response.

    Includes results and per-query statistics.
    """

    model_config = ConfigDict(frozen=True)

    results: list[SearchResult]
    stats: SearchStats = Field(default_factory=SearchStats)
