"""Sheet addressing and table conversion exceptions."""

from __future__ import annotations


class SheetsError(Exception):
    """Base exception for table and sheet errors."""


class InvalidDimensionError(SheetsError):
    """A region has no rows, no columns, or no sheet name."""


class UnsupportedColumnCountError(SheetsError):
    """Column count is beyond what a sheet can address."""

    def __init__(self, column_count: int, maximum: int):
        self.column_count = column_count
        self.maximum = maximum
        super().__init__(f"{column_count} columns requested, at most {maximum} are supported")


class EmptyResultError(SheetsError):
    """A sheet holds no data rows."""


class ColumnCountMismatchError(SheetsError):
    """A line does not have as many columns as the first line."""

    def __init__(self, line: str, line_number: int, expected: int, actual: int):
        self.line = line
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid number of columns on line {line_number} "
            f"(expected {expected}, got {actual}): {line}"
        )


class EmptyLineError(SheetsError):
    """A table file contains a blank line."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"line {line_number} is empty")


class RemoteFailureError(SheetsError):
    """The Sheets API returned an error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
