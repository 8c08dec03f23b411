"""Unit tests for the streamed shapefile reader."""

from __future__ import annotations

from pathlib import Path

import fiona
import pytest

from core.types import QualifiedSource
from ingest.context import IngestContext
from ingest.shapefile_reader import read_shapefile_source
from rules.identifier import build_identifier_function

_SCHEMA = {"geometry": "Point", "properties": {"name": "str", "code": "int"}}


@pytest.fixture
def shapefile_path(tmp_path: Path) -> Path:
    """Write a small point shapefile."""
    path = tmp_path / "wells.shp"
    with fiona.open(path, "w", driver="ESRI Shapefile", schema=_SCHEMA, crs="EPSG:4326") as sink:
        for name, code, coordinates in (("first", 11, (1.0, 2.0)), ("second", 22, (3.0, 4.0))):
            sink.write(
                fiona.Feature.from_dict(
                    {
                        "geometry": {"type": "Point", "coordinates": coordinates},
                        "properties": {"name": name, "code": code},
                    }
                )
            )
    return path


def _source(path: Path) -> QualifiedSource:
    return QualifiedSource(name="wells", path=path, source_format="shapefile")


def test_records_are_appended_in_stream_order(shapefile_path: Path) -> None:
    """Every record should become a feature in file order."""
    staging: dict = {}

    outcome = read_shapefile_source(_source(shapefile_path), IngestContext(), staging)

    assert outcome.entry_count == 2 and [
        f["properties"]["name"] for f in staging["wells"]["features"]
    ] == ["first", "second"]


def test_identifier_rules_apply_to_attributes(shapefile_path: Path) -> None:
    """Identifier rules read shapefile attributes."""
    context = IngestContext(identifier=build_identifier_function("name"))
    staging: dict = {}

    read_shapefile_source(_source(shapefile_path), context, staging)

    assert [f["id"] for f in staging["wells"]["features"]] == ["first", "second"]


def test_ignore_properties_drops_attributes(shapefile_path: Path) -> None:
    """Attributes should be dropped when ignored."""
    staging: dict = {}

    read_shapefile_source(
        _source(shapefile_path), IngestContext(ignore_shapefile_properties=True), staging
    )

    assert all(f["properties"] == {} for f in staging["wells"]["features"])


def test_missing_shapefile_reports_error(tmp_path: Path) -> None:
    """Open failures are reported through the outcome."""
    staging: dict = {}

    outcome = read_shapefile_source(_source(tmp_path / "absent.shp"), IngestContext(), staging)

    assert outcome.succeeded is False and staging == {}
