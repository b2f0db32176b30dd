"""Corpus intake helpers: validation, dataset merging, column discovery.

The ranking engine assumes it is handed a validated corpus. These helpers
are the checks callers run when rows arrive from spreadsheets, before any
query is issued.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from tabular_search.domain.search import Row
from tabular_search.search.fields import DEFAULT_FIELDS


SOURCE_FIELD = "_fileName"


class ValidationResult(BaseModel):
    """Outcome of checking a dataset's shape."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error: str | None = None
    missing_columns: list[str] = Field(default_factory=list)


def _has_column(row: Row, column: str) -> bool:
    return column in row or column.capitalize() in row


def validate_rows(rows: Sequence[Row], file_name: str | None = None) -> ValidationResult:
    """Check that a dataset is non-empty and has a title or description column.

    Only the first row is inspected, since spreadsheet rows share one header.
    Either column alone is enough; ``missing_columns`` still lists the one
    that is absent.
    """
    label = f'"{file_name}" ' if file_name else ""
    if not rows:
        return ValidationResult(is_valid=False, error=f"Dataset {label}is empty or invalid")

    first_row = rows[0]
    missing = [column for column in DEFAULT_FIELDS if not _has_column(first_row, column)]
    if len(missing) == len(DEFAULT_FIELDS):
        return ValidationResult(
            is_valid=False,
            error=f'Dataset {label}must contain at least a "title" or "description" column',
            missing_columns=missing,
        )
    return ValidationResult(is_valid=True, missing_columns=missing)


def combine_datasets(datasets: Iterable[tuple[Sequence[Row], str]]) -> list[dict[str, str]]:
    """Concatenate datasets, tagging every row copy with its source file name."""

    combined: list[dict[str, str]] = []
    for rows, file_name in datasets:
        combined.extend({**row, SOURCE_FIELD: file_name} for row in rows)
    return combined


def available_columns(rows: Iterable[Row]) -> list[str]:
    """Return the sorted union of column names, excluding the source tag."""

    columns: set[str] = set()
    for row in rows:
        columns.update(key for key in row if key != SOURCE_FIELD)
    return sorted(columns)
