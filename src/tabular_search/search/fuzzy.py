"""Edit distance for typo-tolerant matching.

The distance is computed in full and thresholded by callers, so it stays a
true metric that can be unit tested on its own.
"""

from __future__ import annotations

from collections.abc import Iterable


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Uses dynamic programming with two rolling rows, O(m*n) time and
    O(min(m, n)) space. Comparison is case-sensitive.

    Args:
        s1: First string.
        s2: Second string.

    Returns:
        The minimum number of single-character edits (insertions,
        deletions, substitutions) needed to change s1 into s2.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Use shorter string as columns for space efficiency
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    prev_row = list(range(len(s1) + 1))
    for j, char2 in enumerate(s2, start=1):
        curr_row = [j]
        for i, char1 in enumerate(s1, start=1):
            cost = 0 if char1 == char2 else 1
            curr_row.append(
                min(
                    prev_row[i] + 1,  # deletion
                    curr_row[i - 1] + 1,  # insertion
                    prev_row[i - 1] + cost,  # substitution
                )
            )
        prev_row = curr_row

    return prev_row[-1]


def count_fuzzy_matches(term: str, candidates: Iterable[str], max_distance: int = 2) -> int:
    """Count candidates within ``max_distance`` edits of ``term``.

    Every occurrence counts, so a term repeated in the candidate list is
    counted once per repetition.
    """
    return sum(1 for candidate in candidates if levenshtein_distance(term, candidate) <= max_distance)
