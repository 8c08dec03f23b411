"""Unit tests for the ingest run entry point."""

from __future__ import annotations

import pytest

from core.errors import ExternalPropertiesError, RuleError
from core.types import IngestOptions
from ingest.pipeline import run_ingest
from tests.fixture_paths import fixture_path


def test_run_ingest_builds_objects_rules_and_table() -> None:
    """A run returns named objects, compiled rules, and the external table."""
    options = IngestOptions(
        inputs=(str(fixture_path("cities.csv")), str(fixture_path("regions.json"))),
        id_properties="name",
        properties="pop=+population",
        external_properties=(str(fixture_path("census.csv")),),
    )

    result = run_ingest(options)

    assert (list(result.objects), result.external_properties) == (
        ["cities", "regions"],
        {"7": {"pop": 1200}, "8": {}},
    )


def test_external_join_runs_before_any_reader() -> None:
    """External properties failures stop the run before geometry is read."""
    options = IngestOptions(
        inputs=(str(fixture_path("broken.json")),),
        properties=True,
        external_properties=(str(fixture_path("census_no_id.csv")),),
    )

    with pytest.raises(ExternalPropertiesError):
        run_ingest(options)


def test_malformed_rules_fail_before_reading() -> None:
    """Rule compilation errors surface before any input is touched."""
    options = IngestOptions(inputs=(str(fixture_path("broken.json")),), id_properties="+")

    with pytest.raises(RuleError):
        run_ingest(options)
