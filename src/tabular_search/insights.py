"""Lightweight row insights: keyword tags and field value distributions."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from tabular_search.domain.search import Row
from tabular_search.search.fields import FieldResolver


# (tag, keywords searched in title + description)
CONTENT_TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("authentication", ("login", "auth")),
    ("ui", ("ui", "interface")),
    ("backend", ("api", "backend")),
    ("mobile", ("mobile", "responsive")),
    ("issue", ("error", "issue")),
    ("performance", ("performance", "slow")),
    ("security", ("security", "vulnerability")),
)


def generate_tags(row: Row) -> list[str]:
    """Derive display tags from a row's priority, status, and text.

    Matching is substring based and case-insensitive, so "ui" also fires on
    words such as "build". Tags come back deduplicated in rule order.
    """
    resolver = FieldResolver(row)
    text = resolver.title_and_description().lower()
    priority = resolver.get("priority").lower()
    status = resolver.get("status").lower()

    tags: list[str] = []
    if "high" in priority or "urgent" in priority:
        tags.append("high-priority")
    if "critical" in priority:
        tags.append("critical")

    if "bug" in status or "bug" in text:
        tags.append("bug")
    if "feature" in status or "feature" in text:
        tags.append("feature")
    if "done" in status or "complete" in status:
        tags.append("completed")

    for tag, keywords in CONTENT_TAG_RULES:
        if any(keyword in text for keyword in keywords):
            tags.append(tag)

    return list(dict.fromkeys(tags))


def value_distribution(rows: Iterable[Row], field: str, missing: str = "Unknown") -> list[tuple[str, int]]:
    """Count each distinct value of ``field``, in first-seen order.

    Rows without the field are counted under ``missing``.
    """
    counts: Counter[str] = Counter()
    for row in rows:
        counts[FieldResolver(row).get(field) or missing] += 1
    return list(counts.items())
