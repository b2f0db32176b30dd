"""Unit tests for field resolution and weighted document construction."""

import pytest

from tabular_search.search.fields import (
    FieldResolver,
    build_document,
    lookup_case_insensitive,
    repeat_count,
    resolve_weight,
)


@pytest.mark.unit
class TestLookupCaseInsensitive:
    def test_exact_key(self):
        assert lookup_case_insensitive({"title": "Login"}, "title") == "Login"

    def test_capitalized_key(self):
        assert lookup_case_insensitive({"Title": "Login"}, "title") == "Login"

    def test_empty_exact_value_falls_back(self):
        assert lookup_case_insensitive({"title": "", "Title": "Login"}, "title") == "Login"

    def test_missing(self):
        assert lookup_case_insensitive({"status": "open"}, "title") is None


@pytest.mark.unit
class TestFieldResolver:
    def test_title_and_description(self):
        resolver = FieldResolver({"Title": "Login bug", "description": "Cannot authenticate"})
        assert resolver.title == "Login bug"
        assert resolver.description == "Cannot authenticate"
        assert resolver.title_and_description() == "Login bug Cannot authenticate"

    def test_missing_field_is_empty(self):
        assert FieldResolver({"title": "Login"}).get("owner") == ""

    def test_non_string_values_are_stringified(self):
        resolver = FieldResolver({"count": 5, "zero": 0})
        assert resolver.get("count") == "5"
        assert resolver.get("zero") == ""


@pytest.mark.unit
class TestResolveWeight:
    def test_defaults(self):
        assert resolve_weight({}, "title") == 2.0
        assert resolve_weight({}, "Title") == 2.0
        assert resolve_weight({}, "status") == 1.0

    def test_configured_weight(self):
        assert resolve_weight({"Title": 3}, "title") == 3.0
        assert resolve_weight({"status": 1.5}, "status") == 1.5

    @pytest.mark.parametrize("weight", [0, -2.0])
    def test_non_positive_weight_counts_as_unset(self, weight):
        assert resolve_weight({"title": weight}, "title") == 2.0
        assert resolve_weight({"status": weight}, "status") == 1.0

    def test_custom_defaults(self):
        assert resolve_weight({}, "title", default_title_weight=4.0) == 4.0
        assert resolve_weight({}, "status", default_weight=2.5) == 2.5


@pytest.mark.unit
class TestRepeatCount:
    @pytest.mark.parametrize(("weight", "expected"), [(1.0, 1), (1.5, 2), (2.0, 2), (0.2, 1), (0, 0)])
    def test_rounds_up(self, weight, expected):
        assert repeat_count(weight) == expected


@pytest.mark.unit
class TestBuildDocument:
    def test_title_counts_twice_by_default(self, issue_rows):
        assert build_document(issue_rows[0]) == "Login bug Login bug Cannot authenticate"

    def test_column_weights(self, issue_rows):
        document = build_document(issue_rows[0], column_weights={"description": 3})
        assert document == (
            "Login bug Login bug Cannot authenticate Cannot authenticate Cannot authenticate"
        )

    def test_search_columns_replace_defaults(self, tracker_rows):
        assert build_document(tracker_rows[0], search_columns=("status",)) == "open"
        assert build_document(tracker_rows[0], search_columns=("status", "priority")) == "open A"

    def test_title_default_weight_applies_to_search_columns(self, tracker_rows):
        assert build_document(tracker_rows[0], search_columns=("title",)) == "Login bug Login bug"

    def test_missing_fields_are_skipped_in_text(self):
        assert build_document({"title": "Login"}) == "Login Login"
        assert build_document({"status": "open"}) == ""

    def test_row_is_not_modified(self, issue_rows):
        snapshot = dict(issue_rows[0])
        build_document(issue_rows[0], column_weights={"title": 5})
        assert issue_rows[0] == snapshot
