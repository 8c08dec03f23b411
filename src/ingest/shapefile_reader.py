"""Streamed shapefile reader.

Records are pulled from a fiona collection one at a time and appended
to the target feature collection in stream order.
"""

from __future__ import annotations

import fiona
from fiona.errors import FionaError
from fiona.model import to_dict

from core.constants import FEATURE_COLLECTION_TYPE
from core.errors import IngestError
from core.logging_config import get_logger
from core.types import Feature, FeatureCollection, NamedSources, QualifiedSource, ReaderOutcome
from ingest.context import IngestContext

_LOGGER = get_logger(__name__)


def read_shapefile_source(
    source: QualifiedSource,
    context: IngestContext,
    staging: NamedSources,
) -> ReaderOutcome:
    """Stream a shapefile into the staging map.

    Args:
        source: Shapefile source reference.
        context: Run context with encoding and identifier settings.
        staging: Map receiving the feature collection on success.

    Returns:
        Reader outcome carrying the feature count or the failure.
    """
    try:
        collection = load_shapefile_collection(source, context)
    except IngestError as error:
        return ReaderOutcome(source=source, error=error)
    staging[source.name] = collection
    return ReaderOutcome(source=source, entry_count=len(collection["features"]))


def load_shapefile_collection(
    source: QualifiedSource,
    context: IngestContext,
) -> FeatureCollection:
    """Read every shapefile record until the stream is exhausted.

    Raises:
        IngestError: If the shapefile cannot be opened or a record fails to decode.
    """
    features: list[Feature] = []
    try:
        with fiona.open(source.path, encoding=context.shapefile_encoding) as records:
            _LOGGER.debug(
                "shapefile_opened",
                source=source.name,
                driver=records.driver,
                encoding=context.shapefile_encoding,
            )
            for record in records:
                features.append(record_to_feature(to_dict(record), context))
    except (FionaError, OSError, ValueError) as error:
        raise IngestError(
            f"Failed to read shapefile {source.path}: {error}. "
            "Check that the .shp/.dbf/.shx files exist and the encoding is correct."
        ) from error
    return {"type": FEATURE_COLLECTION_TYPE, "features": features}


def record_to_feature(record: dict, context: IngestContext) -> Feature:
    """Convert a fiona record into a feature, dropping the reader's row index."""
    properties = {} if context.ignore_shapefile_properties else dict(record.get("properties") or {})
    return {
        "type": "Feature",
        "id": context.identifier({"properties": properties}),
        "properties": properties,
        "geometry": record.get("geometry"),
    }
