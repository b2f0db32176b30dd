"""Unit tests for corpus validation and dataset merging."""

import pytest

from tabular_search.corpus import SOURCE_FIELD, available_columns, combine_datasets, validate_rows


@pytest.mark.unit
class TestValidateRows:
    def test_valid_dataset(self, issue_rows):
        result = validate_rows(issue_rows)

        assert result.is_valid
        assert result.error is None
        assert result.missing_columns == []

    def test_either_column_is_enough(self):
        result = validate_rows([{"Description": "Cannot authenticate"}])

        assert result.is_valid
        assert result.missing_columns == ["title"]

    def test_empty_dataset(self):
        result = validate_rows([])

        assert not result.is_valid
        assert result.error == "Dataset is empty or invalid"

    def test_empty_dataset_with_file_name(self):
        result = validate_rows([], file_name="issues.xlsx")
        assert result.error == 'Dataset "issues.xlsx" is empty or invalid'

    def test_missing_both_columns(self):
        result = validate_rows([{"status": "open"}], file_name="issues.csv")

        assert not result.is_valid
        assert result.error == 'Dataset "issues.csv" must contain at least a "title" or "description" column'
        assert result.missing_columns == ["title", "description"]

    def test_only_first_row_is_checked(self):
        assert validate_rows([{"title": "Login"}, {"status": "open"}]).is_valid


@pytest.mark.unit
class TestCombineDatasets:
    def test_tags_rows_with_source(self, issue_rows):
        combined = combine_datasets([(issue_rows, "a.xlsx"), ([{"title": "Dark mode"}], "b.csv")])

        assert len(combined) == 3
        assert [row[SOURCE_FIELD] for row in combined] == ["a.xlsx", "a.xlsx", "b.csv"]
        assert combined[2]["title"] == "Dark mode"

    def test_source_rows_are_not_modified(self, issue_rows):
        combine_datasets([(issue_rows, "a.xlsx")])
        assert SOURCE_FIELD not in issue_rows[0]

    def test_no_datasets(self):
        assert combine_datasets([]) == []


@pytest.mark.unit
class TestAvailableColumns:
    def test_sorted_union_without_source_tag(self, tracker_rows):
        combined = combine_datasets([(tracker_rows, "a.xlsx"), ([{"owner": "kim"}], "b.csv")])
        assert available_columns(combined) == ["description", "owner", "priority", "status", "title"]

    def test_empty(self):
        assert available_columns([]) == []
