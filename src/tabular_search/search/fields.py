"""Field resolution and weighted document construction.

Rows come from spreadsheets where the same column may be spelled ``title``
or ``Title``. Lookups go through ``FieldResolver`` once per row instead of
scattering casing fallbacks through the pipeline.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import math
from typing import TypeVar

from tabular_search.domain.search import Row


TITLE_FIELD = "title"
DESCRIPTION_FIELD = "description"
DEFAULT_FIELDS: tuple[str, ...] = (TITLE_FIELD, DESCRIPTION_FIELD)

_V = TypeVar("_V")


def lookup_case_insensitive(mapping: Mapping[str, _V], name: str) -> _V | None:
    """Return the first truthy value whose key matches ``name`` ignoring case.

    An exact key match is preferred; otherwise keys are tried in mapping
    order. Falsy values (empty strings, zero) count as missing.
    """
    value = mapping.get(name)
    if value:
        return value
    target = name.lower()
    for key, candidate in mapping.items():
        if key.lower() == target and candidate:
            return candidate
    return None


class FieldResolver:
    """Case-insensitive accessor over a single row."""

    def __init__(self, row: Row) -> None:
        self.row = row

    def get(self, name: str) -> str:
        """Return the field text, or an empty string when the field is missing."""
        value = lookup_case_insensitive(self.row, name)
        return str(value) if value else ""

    @property
    def title(self) -> str:
        return self.get(TITLE_FIELD)

    @property
    def description(self) -> str:
        return self.get(DESCRIPTION_FIELD)

    def title_and_description(self) -> str:
        return f"{self.title} {self.description}"


def resolve_weight(
    column_weights: Mapping[str, float],
    field: str,
    *,
    default_weight: float = 1.0,
    default_title_weight: float = 2.0,
) -> float:
    """Return the configured weight of ``field``; non-positive weights count as unset."""
    weight = lookup_case_insensitive(column_weights, field)
    if weight is not None and weight > 0:
        return float(weight)
    return default_title_weight if field.lower() == TITLE_FIELD else default_weight


def repeat_count(weight: float) -> int:
    """Number of times a field's text is repeated: the weight rounded up."""
    return max(math.ceil(weight), 0)


def build_document(
    row: Row,
    *,
    search_columns: Sequence[str] = (),
    column_weights: Mapping[str, float] | None = None,
    default_weight: float = 1.0,
    default_title_weight: float = 2.0,
) -> str:
    """Concatenate the selected fields of a row, each repeated by its weight.

    Args:
        row: Source row.
        search_columns: Fields to include, in order; empty means title then description.
        column_weights: Per-field weights, looked up case-insensitively.
        default_weight: Weight of fields without a configured weight.
        default_title_weight: Weight of the title field without a configured weight.

    Returns:
        The weighted document text, stripped of surrounding whitespace.
    """
    resolver = FieldResolver(row)
    weights = column_weights or {}
    pieces: list[str] = []
    for field in search_columns or DEFAULT_FIELDS:
        weight = resolve_weight(
            weights,
            field,
            default_weight=default_weight,
            default_title_weight=default_title_weight,
        )
        value = resolver.get(field)
        pieces.extend([value] * repeat_count(weight))
    return " ".join(pieces).strip()
