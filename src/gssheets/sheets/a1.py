"""A1 range addresses for whole-column regions.

An address has the form ``<sheet>!A:<end column>``: every row of the
columns from A through the last column of a table. Columns are labelled
in bijective base 26, so 1 is A, 26 is Z, 27 is AA and 18278 is ZZZ, the
last column a Google Sheets spreadsheet can hold.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from gssheets.sheets.exceptions import InvalidDimensionError, UnsupportedColumnCountError

MAX_COLUMNS = 18278

_PLAIN_SHEET_NAME = re.compile(r"^\w+$")


def column_label(index: int) -> str:
    """Convert a 1-based column index to its letter label.

    Args:
        index: Column number, 1 for the first column.

    Returns:
        Column label such as "A", "Z" or "AA".

    Raises:
        InvalidDimensionError: If index is less than 1.
        UnsupportedColumnCountError: If index is past the last sheet column.
    """
    if index < 1:
        raise InvalidDimensionError(f"column index must be at least 1, got {index}")
    if index > MAX_COLUMNS:
        raise UnsupportedColumnCountError(index, MAX_COLUMNS)

    label = ""
    while index:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def quote_sheet_name(name: str) -> str:
    """Quote a sheet title for use in A1 notation if it needs it."""
    if _PLAIN_SHEET_NAME.match(name):
        return name
    escaped = name.replace("'", "''")
    return f"'{escaped}'"


def compute_range(sheet_name: str, column_count: int) -> str:
    """Compute the full-height range covering the first column_count columns.

    Args:
        sheet_name: Title of the sheet.
        column_count: Number of columns in the region.

    Returns:
        Range such as "Data!A:D".

    Raises:
        InvalidDimensionError: If sheet_name is empty or column_count < 1.
        UnsupportedColumnCountError: If column_count exceeds MAX_COLUMNS.
    """
    if not sheet_name:
        raise InvalidDimensionError("sheet name is required")
    if column_count < 1:
        raise InvalidDimensionError("at least one column is required")

    return f"{quote_sheet_name(sheet_name)}!A:{column_label(column_count)}"


def range_for_table(sheet_name: str, table: Sequence[Sequence[Any]]) -> str:
    """Compute the range that holds a table, sized by its first row."""
    if len(table) == 0:
        raise InvalidDimensionError("at least one row is required")
    return compute_range(sheet_name, len(table[0]))
