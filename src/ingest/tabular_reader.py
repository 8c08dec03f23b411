"""Point-per-row tabular reader.

Each row becomes a Point feature built from its longitude and latitude
columns. Remaining columns are kept verbatim as properties.
"""

from __future__ import annotations

import math
from typing import Any

import pyarrow as pa

from core.constants import FEATURE_COLLECTION_TYPE, ROW_ID_COLUMN
from core.errors import IngestError
from core.types import Feature, FeatureCollection, NamedSources, QualifiedSource, ReaderOutcome
from ingest.context import IngestContext
from ingest.tabular_io import infer_delimiter, parse_delimited


def read_tabular_source(
    source: QualifiedSource,
    context: IngestContext,
    staging: NamedSources,
) -> ReaderOutcome:
    """Read a CSV/TSV point file into the staging map.

    Args:
        source: Tabular source reference.
        context: Run context with identifier and coordinate columns.
        staging: Map receiving the feature collection on success.

    Returns:
        Reader outcome carrying the feature count or the failure.
    """
    try:
        collection = load_point_collection(source, context)
    except IngestError as error:
        return ReaderOutcome(source=source, error=error)
    staging[source.name] = collection
    return ReaderOutcome(source=source, entry_count=len(collection["features"]))


def load_point_collection(source: QualifiedSource, context: IngestContext) -> FeatureCollection:
    """Parse a tabular file into a point feature collection.

    Raises:
        IngestError: If the file is unreadable or malformed.
    """
    try:
        raw = source.path.read_bytes()
    except OSError as error:
        raise IngestError(
            f"Failed to read tabular source {source.path}: {error.strerror or error}."
        ) from error
    delimiter = infer_delimiter(source.path, raw.decode("utf-8", errors="replace"))
    try:
        table = parse_delimited(raw, delimiter)
    except (pa.ArrowException, UnicodeDecodeError) as error:
        raise IngestError(
            f"Failed to parse tabular source {source.path}: {error}. "
            "Check the header row and delimiter, then retry."
        ) from error
    features = [row_to_feature(row, context) for row in table.rows]
    return {"type": FEATURE_COLLECTION_TYPE, "features": features}


def row_to_feature(row: dict[str, Any], context: IngestContext) -> Feature:
    """Build a point feature from one row, consuming the coordinate columns."""
    properties = dict(row)
    x = _parse_coordinate(properties.pop(context.longitude, None))
    y = _parse_coordinate(properties.pop(context.latitude, None))
    geometry = None
    if x is not None and y is not None:
        geometry = {"type": "Point", "coordinates": [x, y]}
    return {
        "type": "Feature",
        "id": context.identifier({"id": properties.get(ROW_ID_COLUMN), "properties": properties}),
        "properties": properties,
        "geometry": geometry,
    }


def _parse_coordinate(value: object) -> float | None:
    if value is None:
        return None
    try:
        coordinate = float(str(value).strip())
    except ValueError:
        return None
    return coordinate if math.isfinite(coordinate) else None
