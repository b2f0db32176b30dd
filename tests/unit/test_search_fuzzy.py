"""Unit tests for edit distance and fuzzy term counting."""

import pytest

from tabular_search.search.fuzzy import count_fuzzy_matches, levenshtein_distance


@pytest.mark.unit
class TestLevenshteinDistance:
    """Tests for levenshtein_distance function."""

    @pytest.mark.parametrize("value", ["", "a", "login", "로그인"])
    def test_identical_strings(self, value):
        assert levenshtein_distance(value, value) == 0

    def test_empty_strings(self):
        assert levenshtein_distance("abc", "") == 3
        assert levenshtein_distance("", "abc") == 3

    def test_single_insertion(self):
        assert levenshtein_distance("cat", "cats") == 1

    def test_single_deletion(self):
        assert levenshtein_distance("cats", "cat") == 1

    def test_single_substitution(self):
        assert levenshtein_distance("cat", "bat") == 1

    def test_multiple_edits(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_completely_different(self):
        assert levenshtein_distance("abc", "xyz") == 3

    def test_case_sensitive(self):
        assert levenshtein_distance("Login", "login") == 1

    def test_symmetric(self):
        assert levenshtein_distance("logn", "login") == levenshtein_distance("login", "logn") == 1

    def test_unbounded(self):
        assert levenshtein_distance("authenticate", "bug") == 11


@pytest.mark.unit
class TestCountFuzzyMatches:
    def test_counts_every_occurrence(self):
        assert count_fuzzy_matches("logn", ["login", "bug", "login"]) == 2

    def test_respects_max_distance(self):
        assert count_fuzzy_matches("colr", ["color", "colour"], max_distance=1) == 1
        assert count_fuzzy_matches("colr", ["color", "colour"], max_distance=2) == 2

    def test_no_candidates(self):
        assert count_fuzzy_matches("login", []) == 0
