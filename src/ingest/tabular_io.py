"""Delimited text parsing shared by tabular and external-property readers.

Every column is read as a string so values reach the rule engine verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
import io
from pathlib import Path

import pyarrow as pa
from pyarrow import csv

from core.constants import COMMA_SEPARATED_EXTENSIONS, TAB_SEPARATED_EXTENSIONS


@dataclass(frozen=True)
class DelimitedTable:
    """Parsed delimited file.

    Attributes:
        column_names: Header column names in file order.
        rows: One mapping per data row, keyed by column name.
    """

    column_names: tuple[str, ...]
    rows: list[dict[str, str | None]]


def infer_delimiter(path: Path, text: str) -> str:
    """Infer a delimiter from the file extension, then from its contents.

    Args:
        path: File path used for the extension check.
        text: File contents used when the extension is not conclusive.

    Returns:
        Tab or comma.
    """
    suffix = path.suffix.lower()
    if suffix in TAB_SEPARATED_EXTENSIONS:
        return "\t"
    if suffix in COMMA_SEPARATED_EXTENSIONS:
        return ","
    return "\t" if "\t" in text else ","


def parse_delimited(raw: bytes, delimiter: str, empty_as_null: bool = False) -> DelimitedTable:
    """Parse delimited bytes into string rows.

    Args:
        raw: File contents including the header row.
        delimiter: Field delimiter.
        empty_as_null: Read empty cells as None instead of "".

    Returns:
        Parsed table with string-valued rows.

    Raises:
        pyarrow.ArrowInvalid: If the content is empty or malformed.
    """
    parse_options = csv.ParseOptions(delimiter=delimiter)
    column_names = _read_column_names(raw, parse_options)
    table = csv.read_csv(
        io.BytesIO(raw),
        parse_options=parse_options,
        read_options=csv.ReadOptions(use_threads=False),
        convert_options=csv.ConvertOptions(
            column_types={name: pa.string() for name in column_names},
            null_values=[""],
            strings_can_be_null=empty_as_null,
        ),
    )
    return DelimitedTable(column_names=tuple(table.column_names), rows=table.to_pylist())


def _read_column_names(raw: bytes, parse_options: csv.ParseOptions) -> list[str]:
    """Read only the header row to learn the column names."""
    header_line = raw.split(b"\n", 1)[0]
    header_table = csv.read_csv(io.BytesIO(header_line + b"\n"), parse_options=parse_options)
    return header_table.column_names
