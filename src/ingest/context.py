"""Per-run ingestion context.

The context carries the compiled rule functions and reader settings.
It is built once before any reader runs and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from core.constants import DEFAULT_LATITUDE_COLUMN, DEFAULT_LONGITUDE_COLUMN
from core.types import IngestOptions
from ingest.topology_decoder import decode_topology_object
from rules.identifier import IdentifierFunction, build_identifier_function
from rules.property_transform import PropertyTransform, build_property_transform

TopologyDecoder = Callable[[Mapping[str, Any], Mapping[str, Any]], Any]


@dataclass(frozen=True)
class IngestContext:
    """Read-only settings shared by all readers of one run.

    Attributes:
        identifier: Identifier function applied to tabular and shapefile features.
        property_transform: Property transform for external joins and topology build.
        longitude: Longitude column for tabular input.
        latitude: Latitude column for tabular input.
        shapefile_encoding: Optional shapefile attribute encoding.
        ignore_shapefile_properties: Emit shapefile features without attributes.
        decoder: Topology-to-geometry decoder used by the JSON reader.
    """

    identifier: IdentifierFunction = field(default_factory=IdentifierFunction)
    property_transform: PropertyTransform = field(default_factory=PropertyTransform)
    longitude: str = DEFAULT_LONGITUDE_COLUMN
    latitude: str = DEFAULT_LATITUDE_COLUMN
    shapefile_encoding: str | None = None
    ignore_shapefile_properties: bool = False
    decoder: TopologyDecoder = decode_topology_object


def build_ingest_context(options: IngestOptions) -> IngestContext:
    """Compile rules and reader settings from ingest options.

    Raises:
        RuleError: If identifier or property specifiers are malformed.
    """
    return IngestContext(
        identifier=build_identifier_function(options.id_properties),
        property_transform=build_property_transform(options.properties),
        longitude=options.longitude,
        latitude=options.latitude,
        shapefile_encoding=options.shapefile_encoding,
        ignore_shapefile_properties=options.ignore_shapefile_properties,
    )
