"""End-to-end tests running the CLI through the real topojson pipeline."""

from __future__ import annotations

import json
from pathlib import Path

from cli.main import main


def _write_square(path: Path, feature_id: str, min_x: float) -> None:
    ring = [[min_x, 0.0], [min_x + 1, 0.0], [min_x + 1, 1.0], [min_x, 1.0], [min_x, 0.0]]
    document = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": feature_id,
                "properties": {"label": feature_id.upper()},
                "geometry": {"type": "Polygon", "coordinates": [ring]},
            }
        ],
    }
    path.write_text(json.dumps(document), encoding="utf-8")


def _run(tmp_path: Path, *arguments: str) -> dict:
    output_path = tmp_path / "out.topojson"
    exit_code = main([*arguments, "-o", str(output_path)])
    assert exit_code == 0
    return json.loads(output_path.read_text(encoding="utf-8"))


def test_two_polygon_sources_share_one_topology(tmp_path: Path) -> None:
    """Each input becomes a named object with arc-backed geometries."""
    _write_square(tmp_path / "left.json", "west", 0.0)
    _write_square(tmp_path / "right.json", "east", 1.0)

    topology = _run(tmp_path, str(tmp_path / "left.json"), str(tmp_path / "right.json"))
    geometries = {
        name: topology["objects"][name]["geometries"] for name in ("left", "right")
    }

    assert topology["arcs"] and all(
        len(entries) == 1 and entries[0]["arcs"] for entries in geometries.values()
    )


def test_feature_ids_and_properties_survive_assembly(tmp_path: Path) -> None:
    """Ids and transformed properties are carried onto the output geometries."""
    _write_square(tmp_path / "left.json", "west", 0.0)
    _write_square(tmp_path / "right.json", "east", 1.0)

    topology = _run(
        tmp_path, str(tmp_path / "left.json"), str(tmp_path / "right.json"), "-p", "name=label"
    )
    left = topology["objects"]["left"]["geometries"][0]

    assert (left["id"], left["properties"]) == ("west", {"name": "WEST"})


def test_tabular_sources_become_point_objects(tmp_path: Path) -> None:
    """Point rows from two tabular inputs keep their row ids under each object."""
    (tmp_path / "a.csv").write_text("id,longitude,latitude\n1,0,0\n2,1,1\n", encoding="utf-8")
    (tmp_path / "b.csv").write_text("id,longitude,latitude\n3,2,2\n", encoding="utf-8")

    topology = _run(tmp_path, str(tmp_path / "a.csv"), str(tmp_path / "b.csv"))
    ids = {
        name: [geometry["id"] for geometry in topology["objects"][name]["geometries"]]
        for name in ("a", "b")
    }

    assert ids == {"a": ["1", "2"], "b": ["3"]}
