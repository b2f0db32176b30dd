"""Unit tests for boolean query parsing and left-to-right evaluation."""

import pytest

from tabular_search.domain.search import ParsedQuery, QueryPredicate
from tabular_search.search.query_parser import matches_query, parse_query, parse_term


@pytest.mark.unit
class TestParseTerm:
    def test_field_term(self):
        assert parse_term("Status: Open ") == QueryPredicate(field="status", value="Open")

    def test_free_text_term(self):
        assert parse_term("  login form ") == QueryPredicate(value="login form")

    def test_field_pattern_found_mid_slot(self):
        # Text before the field name is discarded.
        assert parse_term("fix status:open") == QueryPredicate(field="status", value="open")

    def test_empty_field_value(self):
        assert parse_term("status:") == QueryPredicate(field="status", value="")


@pytest.mark.unit
class TestParseQuery:
    def test_field_scoped_and(self):
        parsed = parse_query("status:open AND priority:A")

        assert parsed.predicates == (
            QueryPredicate(field="status", value="open"),
            QueryPredicate(field="priority", value="A"),
        )
        assert parsed.operators == ("AND",)

    def test_single_free_text_term(self):
        parsed = parse_query("login")
        assert parsed.predicates == (QueryPredicate(value="login"),)
        assert parsed.operators == ()

    def test_connectives_are_case_insensitive(self):
        parsed = parse_query("bug or feature not login")
        assert parsed.operators == ("OR", "NOT")
        assert [predicate.value for predicate in parsed.predicates] == ["bug", "feature", "login"]

    def test_operator_count_is_term_count_minus_one(self):
        parsed = parse_query("a AND b OR c NOT d")
        assert len(parsed.operators) == len(parsed.predicates) - 1

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query(self, query):
        assert parse_query(query) == ParsedQuery()

    def test_trailing_connective_leaves_empty_term(self):
        parsed = parse_query("login AND ")
        assert parsed.predicates == (QueryPredicate(value="login"), QueryPredicate(value=""))
        assert parsed.operators == ("AND",)

    def test_connective_without_trailing_space_is_literal(self):
        parsed = parse_query("login AND")
        assert parsed.predicates == (QueryPredicate(value="login AND"),)
        assert parsed.operators == ()

    def test_connective_inside_word_is_not_split(self):
        parsed = parse_query("android notification")
        assert parsed.predicates == (QueryPredicate(value="android notification"),)

    def test_structured_flag(self):
        assert not parse_query("login form").is_structured
        assert parse_query("status:open").is_structured
        assert parse_query("login OR signup").is_structured


@pytest.mark.unit
class TestMatchesQuery:
    def test_and_of_field_predicates(self, tracker_rows):
        parsed = parse_query("status:open AND priority:A")
        assert [matches_query(parsed, row) for row in tracker_rows] == [True, False, False]

    def test_free_text_checks_title_and_description(self):
        row = {"title": "Login bug", "description": "Cannot authenticate", "status": "open"}
        assert matches_query(parse_query("authenticate"), row)
        assert not matches_query(parse_query("open"), row)

    def test_substring_and_case_insensitive(self):
        row = {"title": "Login bug"}
        assert matches_query(parse_query("LOG"), row)

    def test_field_name_lookup_ignores_case(self):
        row = {"Title": "Login bug", "Status": "Open"}
        assert matches_query(parse_query("status:open"), row)
        assert matches_query(parse_query("login"), row)

    def test_unknown_field_never_matches(self):
        assert not matches_query(parse_query("owner:kim"), {"title": "Login bug"})

    def test_or(self, tracker_rows):
        parsed = parse_query("status:closed OR priority:C")
        assert [matches_query(parsed, row) for row in tracker_rows] == [False, True, True]

    def test_not_is_and_not(self, tracker_rows):
        parsed = parse_query("login NOT timeout")
        assert [matches_query(parsed, row) for row in tracker_rows] == [True, False, False]

    def test_fold_is_strictly_left_to_right(self):
        # ((login OR crash) AND NOT bug), not login OR (crash AND NOT bug)
        parsed = parse_query("login OR crash NOT bug")
        assert not matches_query(parsed, {"title": "login bug"})
        assert matches_query(parsed, {"title": "crash"})

    def test_leading_not_is_literal_text(self):
        parsed = parse_query("NOT bug")
        assert not matches_query(parsed, {"title": "Login bug"})
        assert matches_query(parsed, {"title": "Not bug yet"})

    def test_empty_trailing_term_matches_everything(self):
        parsed = parse_query("login OR ")
        assert matches_query(parsed, {"title": "UI polish"})

    def test_no_predicates_matches(self):
        assert matches_query(ParsedQuery(), {"title": "anything"})
