"""Synonym expansion for indexing and queries.

Synonyms are declared as groups of interchangeable terms. The lookup table
built from them is symmetric: every member of a group expands to every
other member, so "bug" finds rows mentioning "defect" and vice versa.

Example:
    - "bug" expands to ("bug", "issue", "error", "problem", "defect")
    - "done" expands to ("done", "closed", "resolved", "complete")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType


# Issue-tracker vocabulary: kinds of work and their lifecycle states.
DEFAULT_SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("bug", "issue", "error", "problem", "defect"),
    ("feature", "enhancement", "improvement"),
    ("open", "active", "in progress"),
    ("closed", "resolved", "done", "complete"),
)


def build_synonym_table(groups: Iterable[Sequence[str]]) -> Mapping[str, tuple[str, ...]]:
    """Build a read-only term -> synonyms table from synonym groups.

    Each entry lists the other members of the term's group in declaration
    order. A term appearing in several groups collects the members of all of
    them, first group first.
    """
    table: dict[str, list[str]] = {}
    for group in groups:
        members = [member.lower() for member in group if member]
        for member in members:
            synonyms = table.setdefault(member, [])
            for other in members:
                if other != member and other not in synonyms:
                    synonyms.append(other)
    return MappingProxyType({term: tuple(synonyms) for term, synonyms in table.items()})


DEFAULT_SYNONYMS: Mapping[str, tuple[str, ...]] = build_synonym_table(DEFAULT_SYNONYM_GROUPS)


class SynonymExpander:
    """Expands terms using a static synonym table."""

    def __init__(self, synonyms: Mapping[str, Sequence[str]] | None = None) -> None:
        """Initialize with synonym mappings.

        Args:
            synonyms: Custom term -> synonyms mapping. If None, uses DEFAULT_SYNONYMS.
        """
        if synonyms is None:
            self._synonyms = DEFAULT_SYNONYMS
        else:
            self._synonyms = MappingProxyType({key.lower(): tuple(values) for key, values in synonyms.items()})

    def expand(self, term: str) -> tuple[str, ...]:
        """Expand a single term to itself followed by its synonyms.

        Args:
            term: The term to expand.

        Returns:
            Tuple starting with the lowercased term, then its synonyms.
        """
        normalized = term.lower()
        return (normalized, *self._synonyms.get(normalized, ()))
