"""Conversion between sheet grids and comma-delimited text.

The local table format is one row per line with cells separated by a
comma. There is no quoting: a comma inside a cell cannot be told apart
from a separator.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

from gssheets.sheets.exceptions import ColumnCountMismatchError, EmptyLineError, EmptyResultError

logger = logging.getLogger(__name__)

Cell = Any
Row = list[Cell]
Table = list[Row]
Formatter = Callable[[Any], str]


def default_formatter(value: Any) -> str:
    """Render a non-string cell as an empty token."""
    logger.debug(f"value to string: {value!r}")
    return ""


def plain_formatter(value: Any) -> str:
    """Render numbers and booleans as the sheet shows them."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


class TableCodec:
    """Convert between a sheet's rows and delimited text lines.

    Example:
        >>> codec = TableCodec()
        >>> codec.encode(["name,age", "alice,30"])
        [['name', 'age'], ['alice', '30']]
        >>> codec.decode([["name", "age"], ["alice", "30"]])
        ['"name","age"', '"alice","30"']
    """

    def __init__(self, formatter: Formatter = default_formatter, delimiter: str = ","):
        """Initialize the codec.

        Args:
            formatter: Renders a non-string cell as a text token when decoding.
            delimiter: Cell separator.
        """
        self.formatter = formatter
        self.delimiter = delimiter

    def decode(self, rows: Sequence[Sequence[Cell]]) -> list[str]:
        """Render a sheet grid as text lines.

        Args:
            rows: Header row followed by data rows.

        Returns:
            One line per row, in order.

        Raises:
            EmptyResultError: If the grid has no data rows.
        """
        if len(rows) <= 1:
            raise EmptyResultError("the sheet is empty")

        return [self.delimiter.join(self._token(v) for v in row) for row in rows]

    def _token(self, value: Cell) -> str:
        # Strings are always quoted; the formatter only sees other cells
        if isinstance(value, str):
            return f'"{value}"'
        return self.formatter(value)

    def encode(self, lines: Iterable[str]) -> Table:
        """Split text lines into a rectangular table.

        Args:
            lines: Lines of delimited text; trailing newlines are ignored.

        Returns:
            Table with one row per line.

        Raises:
            EmptyLineError: If any line is empty.
            ColumnCountMismatchError: If a line's width differs from the first line's.
        """
        lines = [line.rstrip("\r\n") for line in lines]

        rows: Table = [[] for _ in range(len(lines))]
        cols = 0
        for n, line in enumerate(lines, start=1):
            logger.debug(f"line {n}: {line}")
            if len(line) == 0:
                raise EmptyLineError(n)

            cells = line.split(self.delimiter)
            if cols == 0:
                cols = len(cells)
            elif cols != len(cells):
                raise ColumnCountMismatchError(line, n, cols, len(cells))

            rows[n - 1] = cells

        logger.info(f"Read {len(rows)} rows")
        return rows


def read_lines(path: str | Path) -> list[str]:
    """Read a table file into lines without terminators.

    Only "\\n" ends a line; a "\\r" before it is dropped.
    """
    with open(path, encoding="utf-8", newline="") as f:
        lines = f.read().split("\n")

    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_lines(path: str | Path, lines: Iterable[str]) -> Path:
    """Write lines to a new file, all at once.

    The content goes to a temporary file in the same directory that is
    then hard-linked to the target, so the target only appears complete
    and a file created there in the meantime is never overwritten.

    Raises:
        FileExistsError: If path already exists.
    """
    target = Path(path)
    if target.exists():
        raise FileExistsError(f"{target} already exists")

    directory = target.parent if str(target.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
        os.link(tmp_name, target)
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)

    return target
