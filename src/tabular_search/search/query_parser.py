"""Field-scoped boolean query parsing and evaluation.

Queries look like ``status:open AND priority:A NOT login``. The connectives
are evaluated strictly left to right against a running result, and ``NOT``
is a binary "and-not": ``a NOT b`` keeps rows matching ``a`` but not ``b``.
There is no operator precedence and no unary negation, so ``NOT b`` on its
own is a single free-text predicate for the literal text "NOT b".
"""

from __future__ import annotations

import logging
import re

from tabular_search.domain.search import BooleanOperator, ParsedQuery, QueryPredicate, Row
from tabular_search.search.fields import FieldResolver


logger = logging.getLogger(__name__)

CONNECTIVE_PATTERN = re.compile(r"\s+(AND|OR|NOT)\s+", re.IGNORECASE)
FIELD_TERM_PATTERN = re.compile(r"(\w+):(.*)")


def parse_term(slot: str) -> QueryPredicate:
    """Parse one term slot into a field-scoped or free-text predicate."""

    match = FIELD_TERM_PATTERN.search(slot)
    if match:
        return QueryPredicate(field=match.group(1).lower(), value=match.group(2).strip())
    return QueryPredicate(value=slot.strip())


def parse_query(query: str) -> ParsedQuery:
    """Split a query into predicates and the connectives between them.

    A blank query yields no predicates. Incomplete input never raises: a
    trailing connective leaves an empty free-text predicate behind, which
    matches every row.

    Examples:
        >>> parsed = parse_query("status:open AND priority:A")
        >>> [(p.field, p.value) for p in parsed.predicates]
        [('status', 'open'), ('priority', 'A')]
        >>> parsed.operators
        ('AND',)
    """

    if not query or not query.strip():
        return ParsedQuery()

    slots = CONNECTIVE_PATTERN.split(query)
    predicates = tuple(parse_term(slot) for slot in slots[0::2])
    operators: tuple[BooleanOperator, ...] = tuple(slot.upper() for slot in slots[1::2])  # type: ignore[misc]
    return ParsedQuery(predicates=predicates, operators=operators)


def evaluate_predicate(predicate: QueryPredicate, resolver: FieldResolver) -> bool:
    """Case-insensitive substring test of the predicate against a row."""

    needle = predicate.value.lower()
    if predicate.field:
        haystack = resolver.get(predicate.field)
    else:
        haystack = resolver.title_and_description()
    return needle in haystack.lower()


def matches_query(parsed: ParsedQuery, row: Row) -> bool:
    """Fold the parsed predicates over a row from left to right.

    The first predicate seeds the result; each later predicate is combined
    with the connective before it. A query without predicates matches.
    """

    if not parsed.predicates:
        return True

    resolver = FieldResolver(row)
    result = evaluate_predicate(parsed.predicates[0], resolver)
    for operator, predicate in zip(parsed.operators, parsed.predicates[1:]):
        found = evaluate_predicate(predicate, resolver)
        if operator == "AND":
            result = result and found
        elif operator == "OR":
            result = result or found
        elif operator == "NOT":
            result = result and not found
        else:  # pragma: no cover - parse_query only emits the three connectives
            logger.warning("Ignoring unknown query connective %r", operator)
    return result
