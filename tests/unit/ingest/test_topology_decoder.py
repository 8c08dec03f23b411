"""Unit tests for topology-to-geometry decoding."""

from __future__ import annotations

import json

from ingest.topology_decoder import decode_topology_object
from tests.fixture_paths import fixture_path


def _topology() -> dict:
    return json.loads(fixture_path("layers.topojson").read_text(encoding="utf-8"))


def test_geometry_collection_decodes_to_feature_collection() -> None:
    """GeometryCollection objects should become FeatureCollections."""
    topology = _topology()

    decoded = decode_topology_object(topology, topology["objects"]["a"])

    assert decoded["type"] == "FeatureCollection" and len(decoded["features"]) == 2


def test_arcs_are_delta_decoded_and_transformed() -> None:
    """Quantized arcs should be accumulated then scaled and translated."""
    topology = _topology()

    road = decode_topology_object(topology, topology["objects"]["a"])["features"][0]

    assert road["geometry"] == {
        "type": "LineString",
        "coordinates": [[100.0, 10.0], [101.0, 10.0], [101.0, 11.0]],
    }


def test_points_are_transformed_without_delta() -> None:
    """Point coordinates use the transform directly."""
    topology = _topology()

    well = decode_topology_object(topology, topology["objects"]["a"])["features"][1]

    assert well["geometry"]["coordinates"] == [102.0, 13.0]


def test_polygon_rings_stitch_shared_arcs() -> None:
    """Consecutive arcs drop the duplicated junction point."""
    topology = _topology()

    lake = decode_topology_object(topology, topology["objects"]["b"])

    assert lake["id"] == "lake" and lake["geometry"]["coordinates"] == [
        [[100.0, 10.0], [101.0, 10.0], [101.0, 11.0], [100.0, 10.0]]
    ]


def test_negative_arc_index_reverses_arc() -> None:
    """``~i`` references arc ``i`` in reverse order."""
    topology = {"type": "Topology", "arcs": [[[0, 0], [1, 1]]], "objects": {}}

    line = decode_topology_object(topology, {"type": "LineString", "arcs": [-1]})

    assert line["geometry"]["coordinates"] == [[1, 1], [0, 0]]


def test_null_geometry_object_decodes_to_empty_feature() -> None:
    """Objects without a type carry no geometry."""
    feature = decode_topology_object({"arcs": []}, {"properties": {"a": 1}})

    assert feature == {"type": "Feature", "properties": {"a": 1}, "geometry": None}
