"""External property join.

Side files keyed by an ``id`` column are merged into one table that the
bind stage later attaches to output geometries. Joins run eagerly, once
per file, before any geometry source is read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pyarrow as pa

from core.constants import EXTERNAL_ID_COLUMN
from core.errors import ExternalPropertiesError
from core.logging_config import get_logger
from core.types import ExternalPropertiesTable
from ingest.tabular_io import infer_delimiter, parse_delimited
from rules.property_transform import PropertyTransform

_LOGGER = get_logger(__name__)


def load_external_properties(
    paths: Iterable[str | Path],
    transform: PropertyTransform,
) -> ExternalPropertiesTable:
    """Join every external properties file into a new table.

    Args:
        paths: Delimited files in join order.
        transform: Property transform applied to every non-id column.

    Returns:
        Table mapping id values to merged properties.

    Raises:
        ExternalPropertiesError: If any file is unreadable or lacks an id column.
    """
    table: ExternalPropertiesTable = {}
    for path in paths:
        join_external_properties(Path(path), transform, table)
    return table


def join_external_properties(
    path: Path,
    transform: PropertyTransform,
    table: ExternalPropertiesTable,
) -> None:
    """Merge one external properties file into ``table``.

    Rows sharing an id accumulate into the same properties mapping.
    """
    try:
        raw = path.read_bytes()
    except OSError as error:
        raise ExternalPropertiesError(
            f"Failed to read external properties {path}: {error.strerror or error}."
        ) from error
    delimiter = infer_delimiter(path, raw.decode("utf-8", errors="replace"))
    try:
        parsed = parse_delimited(raw, delimiter, empty_as_null=True)
    except (pa.ArrowException, UnicodeDecodeError) as error:
        raise ExternalPropertiesError(
            f"Failed to parse external properties {path}: {error}."
        ) from error
    if EXTERNAL_ID_COLUMN not in parsed.column_names:
        raise ExternalPropertiesError(
            f"External properties {path} has no '{EXTERNAL_ID_COLUMN}' column. "
            f"Found columns: {', '.join(parsed.column_names) or '(none)'}."
        )
    skipped_count = 0
    for row in parsed.rows:
        row_id = row.pop(EXTERNAL_ID_COLUMN)
        if row_id is None:
            skipped_count += 1
            continue
        properties = table.setdefault(row_id, {})
        for key, value in row.items():
            transform(properties, key, value)
    _LOGGER.info(
        "external_properties_joined",
        path=str(path),
        row_count=len(parsed.rows),
        delimiter="tab" if delimiter == "\t" else "comma",
        skipped_count=skipped_count,
        id_count=len(table),
    )
