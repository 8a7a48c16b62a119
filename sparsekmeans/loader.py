"""
Delimited-text dataset loader.

The first row names the attributes; each following row becomes one Record.
"""

import csv
from typing import List, Optional

from .record import Record


class ParseError(ValueError):
    """Raised when a data cell is not a number or the header is missing."""

    def __init__(self, message: str, line: Optional[int] = None, value: Optional[str] = None):
        super().__init__(message if line is None else f"line {line}: {message}")
        self.line = line
        self.value = value


def parse_row(headers: List[str], row: List[str], line: int,
              description_column: Optional[str] = None) -> Record:
    """Pair one row of cells with the header names.

    A row with a different number of cells than the header gives a Record
    with no features. It is kept in the dataset.
    """
    if len(row) != len(headers):
        return Record({})

    description = ""
    features = {}
    for name, cell in zip(headers, row):
        if name == description_column:
            description = cell.strip()
            continue
        try:
            features[name] = float(cell)
        except ValueError:
            raise ParseError(f"cannot parse {cell!r} for attribute {name!r}", line, cell) from None

    return Record(features, description)


def load_records(path: str, delimiter: str = ",",
                 description_column: Optional[str] = None) -> List[Record]:
    """Read a delimited file into Records.

    Args:
        path: File to read
        delimiter: Cell separator
        description_column: Header name whose cells become Record
            descriptions instead of features

    Returns:
        Records in file order
    """
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter=delimiter)
        try:
            headers = [h.strip() for h in next(reader)]
        except StopIteration:
            raise ParseError(f"{path} has no header row") from None

        if description_column is not None and description_column not in headers:
            raise ParseError(f"description column {description_column!r} not in header")

        return [
            parse_row(headers, row, reader.line_num, description_column)
            for row in reader
        ]
