"""Topology-to-geometry decoding.

Converts one named object of a TopoJSON topology back into GeoJSON.
Arcs are delta-decoded when the topology carries a quantization
transform; point coordinates are transformed absolutely.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from core.constants import FEATURE_COLLECTION_TYPE

Position = list[float]


def decode_topology_object(
    topology: Mapping[str, Any],
    topology_object: Mapping[str, Any],
) -> dict[str, Any]:
    """Decode a topology object into a Feature or FeatureCollection.

    Args:
        topology: Whole topology document, providing arcs and transform.
        topology_object: One entry of the topology ``objects`` mapping.

    Returns:
        A FeatureCollection for GeometryCollection objects, else a Feature.
    """
    decoder = _TopologyDecoder(topology)
    if topology_object.get("type") == "GeometryCollection":
        return {
            "type": FEATURE_COLLECTION_TYPE,
            "features": [
                decoder.feature(geometry) for geometry in topology_object.get("geometries", [])
            ],
        }
    return decoder.feature(topology_object)


class _TopologyDecoder:
    """Decodes geometries against a topology's shared arcs."""

    def __init__(self, topology: Mapping[str, Any]) -> None:
        transform = topology.get("transform")
        self._scale: Sequence[float] | None = transform["scale"] if transform else None
        self._translate: Sequence[float] | None = transform["translate"] if transform else None
        self._arcs = [self._decode_arc(arc) for arc in topology.get("arcs", [])]

    def feature(self, topology_object: Mapping[str, Any]) -> dict[str, Any]:
        feature: dict[str, Any] = {"type": "Feature"}
        if "id" in topology_object:
            feature["id"] = topology_object["id"]
        feature["properties"] = dict(topology_object.get("properties") or {})
        feature["geometry"] = self.geometry(topology_object)
        return feature

    def geometry(self, topology_object: Mapping[str, Any]) -> dict[str, Any] | None:
        geometry_type = topology_object.get("type")
        if geometry_type is None:
            return None
        if geometry_type == "GeometryCollection":
            return {
                "type": geometry_type,
                "geometries": [
                    self.geometry(child) for child in topology_object.get("geometries", [])
                ],
            }
        if geometry_type == "Point":
            coordinates: Any = self._point(topology_object["coordinates"])
        elif geometry_type == "MultiPoint":
            coordinates = [self._point(point) for point in topology_object["coordinates"]]
        elif geometry_type == "LineString":
            coordinates = self._line(topology_object["arcs"])
        elif geometry_type == "MultiLineString":
            coordinates = [self._line(arcs) for arcs in topology_object["arcs"]]
        elif geometry_type == "Polygon":
            coordinates = [self._ring(arcs) for arcs in topology_object["arcs"]]
        elif geometry_type == "MultiPolygon":
            coordinates = [
                [self._ring(arcs) for arcs in polygon] for polygon in topology_object["arcs"]
            ]
        else:
            raise ValueError(f"unsupported topology geometry type '{geometry_type}'")
        return {"type": geometry_type, "coordinates": coordinates}

    def _decode_arc(self, arc: Sequence[Sequence[float]]) -> list[Position]:
        if self._scale is None or self._translate is None:
            return [list(position) for position in arc]
        x = y = 0.0
        positions: list[Position] = []
        for position in arc:
            x += position[0]
            y += position[1]
            positions.append(
                [
                    x * self._scale[0] + self._translate[0],
                    y * self._scale[1] + self._translate[1],
                    *position[2:],
                ]
            )
        return positions

    def _point(self, position: Sequence[float]) -> Position:
        if self._scale is None or self._translate is None:
            return list(position)
        return [
            position[0] * self._scale[0] + self._translate[0],
            position[1] * self._scale[1] + self._translate[1],
            *position[2:],
        ]

    def _arc(self, index: int) -> list[Position]:
        if index < 0:
            return list(reversed(self._arcs[~index]))
        return self._arcs[index]

    def _line(self, arc_indexes: Sequence[int]) -> list[Position]:
        points: list[Position] = []
        for index in arc_indexes:
            if points:
                points.pop()
            points.extend(list(position) for position in self._arc(index))
        if len(points) < 2 and points:
            points.append(list(points[0]))
        return points

    def _ring(self, arc_indexes: Sequence[int]) -> list[Position]:
        points = self._line(arc_indexes)
        while points and len(points) < 4:
            points.append(list(points[0]))
        return points
