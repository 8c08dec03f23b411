"""Topology pipeline backed by the ``topojson`` library.

Builds one topology over all named sources, simplifies with
Visvalingam-Whyatt, drops geometries collapsed by simplification,
binds external properties by geometry id, and writes compact JSON.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping

import geopandas as gpd
from shapely.errors import ShapelyError
from shapely.geometry import shape
import topojson

from core.constants import FEATURE_COLLECTION_TYPE
from core.errors import AssemblyError
from core.logging_config import get_logger
from core.types import (
    CoordinateSystem,
    ExternalPropertiesTable,
    Feature,
    FeatureCollection,
    NamedSources,
    ResolvedOutputOptions,
)
from rules.identifier import IdentifierFunction
from rules.property_transform import PropertyTransform

_LOGGER = get_logger(__name__)
_FEATURE_INDEX_COLUMN = "__feature_index__"


class TopojsonPipeline:
    """Topology pipeline implementation using ``topojson.Topology``.

    Each named source becomes one GeoDataFrame whose rows carry only the
    geometry and the row's position in the prepared collection. Ids and
    properties are restored from that position when the topology is
    serialized, so their JSON types survive the dataframe round trip.
    """

    def __init__(self) -> None:
        self._prepared: dict[str, list[Feature]] = {}

    def build(
        self,
        objects: NamedSources,
        coordinate_system: CoordinateSystem,
        quantization: int,
        identifier: IdentifierFunction,
        property_transform: PropertyTransform,
    ) -> topojson.Topology:
        """Build a single topology over every named source."""
        if coordinate_system == "spherical":
            _LOGGER.warning("spherical_coordinates_unsupported", fallback="cartesian")
        names = list(objects)
        self._prepared = {
            name: prepare_collection(objects[name], identifier, property_transform)["features"]
            for name in names
        }
        try:
            frames = [to_geodataframe(self._prepared[name]) for name in names]
            return topojson.Topology(
                frames,
                object_name=names,
                prequantize=quantization if quantization > 0 else False,
            )
        except (AttributeError, ValueError, TypeError, KeyError, ShapelyError) as error:
            raise AssemblyError(f"Failed to build topology for {names}: {error}.") from error

    def simplify(
        self,
        topology: topojson.Topology,
        coordinate_system: CoordinateSystem,
        threshold: float | None,
        proportion: float | None,
    ) -> topojson.Topology:
        """Simplify shared arcs with an absolute Visvalingam threshold."""
        if threshold is None:
            raise AssemblyError(
                "Proportional simplification is not supported by the topojson pipeline. "
                "Use an absolute simplification threshold instead."
            )
        return topology.toposimplify(
            threshold, simplify_algorithm="vw", simplify_with="simplification"
        )

    def filter(
        self,
        topology: topojson.Topology,
        coordinate_system: CoordinateSystem,
        threshold: float,
    ) -> dict[str, Any]:
        """Serialize to a dict, dropping geometries collapsed to no arcs."""
        data = self._to_dict(topology)
        if threshold <= 0:
            return data
        for topology_object in data.get("objects", {}).values():
            geometries = topology_object.get("geometries")
            if geometries is not None:
                topology_object["geometries"] = [
                    geometry for geometry in geometries if not _is_collapsed(geometry)
                ]
        return data

    def bind(
        self,
        topology: dict[str, Any],
        external_properties: ExternalPropertiesTable,
    ) -> dict[str, Any]:
        """Merge external properties into geometries by id."""
        bound_count = 0
        for topology_object in topology.get("objects", {}).values():
            for geometry in topology_object.get("geometries", [topology_object]):
                if "id" not in geometry:
                    continue
                properties = external_properties.get(str(geometry["id"]))
                if properties is None:
                    continue
                geometry.setdefault("properties", {}).update(properties)
                bound_count += 1
        _LOGGER.info("external_properties_bound", geometry_count=bound_count)
        return topology

    def serialize(self, topology: Any, options: ResolvedOutputOptions) -> str:
        """Write compact JSON to the output path or stdout and return it."""
        if isinstance(topology, topojson.Topology):
            topology = self._to_dict(topology)
        payload = json.dumps(topology, separators=(",", ":"))
        if options.output is None:
            sys.stdout.write(payload + "\n")
            return payload
        try:
            options.output.write_text(payload, encoding="utf-8")
        except OSError as error:
            raise AssemblyError(
                f"Failed to write topology to {options.output}: {error.strerror or error}."
            ) from error
        return payload

    def _to_dict(self, topology: topojson.Topology) -> dict[str, Any]:
        data = topology.to_dict()
        for name, topology_object in data.get("objects", {}).items():
            features = self._prepared.get(name, [])
            for geometry in topology_object.get("geometries", []):
                restore_feature_fields(geometry, features)
        return data


def to_geodataframe(features: list[Feature]) -> gpd.GeoDataFrame:
    """Build a GeoDataFrame of feature geometries keyed by feature position."""
    geometries = [
        shape(feature["geometry"]) if feature.get("geometry") else None for feature in features
    ]
    return gpd.GeoDataFrame(
        {_FEATURE_INDEX_COLUMN: list(range(len(features))), "geometry": geometries},
        geometry="geometry",
    )


def restore_feature_fields(geometry: dict[str, Any], features: list[Feature]) -> None:
    """Replace a geometry's positional marker with its feature's id and properties."""
    properties = geometry.pop("properties", None) or {}
    position = properties.get(_FEATURE_INDEX_COLUMN)
    if position is None:
        return
    feature = features[int(position)]
    if "id" in feature:
        geometry["id"] = feature["id"]
    if feature["properties"]:
        geometry["properties"] = dict(feature["properties"])


def prepare_collection(
    source: Any,
    identifier: IdentifierFunction,
    property_transform: PropertyTransform,
) -> FeatureCollection:
    """Normalize a named source into a feature collection with transformed properties."""
    if isinstance(source, Mapping) and source.get("type") == FEATURE_COLLECTION_TYPE:
        features = source.get("features", [])
    elif isinstance(source, Mapping) and source.get("type") == "Feature":
        features = [source]
    else:
        features = [{"type": "Feature", "properties": {}, "geometry": source}]
    return {
        "type": FEATURE_COLLECTION_TYPE,
        "features": [prepare_feature(feature, identifier, property_transform) for feature in features],
    }


def prepare_feature(
    feature: Mapping[str, Any],
    identifier: IdentifierFunction,
    property_transform: PropertyTransform,
) -> Feature:
    """Apply the identifier and property transform to one feature."""
    properties: dict[str, object] = {}
    for key, value in (feature.get("properties") or {}).items():
        property_transform(properties, key, value)
    prepared: Feature = {
        "type": "Feature",
        "properties": properties,
        "geometry": feature.get("geometry"),
    }
    feature_id = identifier(feature)
    if feature_id is not None:
        prepared["id"] = feature_id
    return prepared


def _is_collapsed(geometry: Mapping[str, Any]) -> bool:
    if geometry.get("type") in ("Point", "MultiPoint", None):
        return False
    return not geometry.get("arcs")
