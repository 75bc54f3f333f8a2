"""Google Sheets access and local table conversion.

Usage:
    from gssheets.sheets import SheetsClient, TableCodec, compute_range

    client = SheetsClient(GoogleOAuth("client-credential.json"))
    codec = TableCodec()

    table = codec.encode(["name,age", "alice,30"])
    sheet = client.create_spreadsheet("people", ["Data"])
    client.write_range(sheet.id, compute_range("Data", 2), table)
"""

from __future__ import annotations

from gssheets.sheets.a1 import MAX_COLUMNS, column_label, compute_range, range_for_table
from gssheets.sheets.client import Sheet, SheetsClient, Spreadsheet
from gssheets.sheets.exceptions import (
    ColumnCountMismatchError,
    EmptyLineError,
    EmptyResultError,
    InvalidDimensionError,
    RemoteFailureError,
    SheetsError,
    UnsupportedColumnCountError,
)
from gssheets.sheets.table import TableCodec, default_formatter, plain_formatter

__all__ = [
    "SheetsClient",
    "Sheet",
    "Spreadsheet",
    "TableCodec",
    "default_formatter",
    "plain_formatter",
    "MAX_COLUMNS",
    "column_label",
    "compute_range",
    "range_for_table",
    "SheetsError",
    "InvalidDimensionError",
    "UnsupportedColumnCountError",
    "EmptyResultError",
    "ColumnCountMismatchError",
    "EmptyLineError",
    "RemoteFailureError",
]
