"""Unit tests for the output assembly contract."""

from __future__ import annotations

from assembly.contract import assemble_output
from assembly.options import resolve_output_options
from core.types import OutputOptions
from rules.identifier import build_identifier_function
from rules.property_transform import build_property_transform
from tests.fake_pipeline import RecordingPipeline

_OBJECTS = {"a": {"type": "FeatureCollection", "features": []}}


def _assemble(options: OutputOptions, external_properties=None) -> RecordingPipeline:
    pipeline = RecordingPipeline()
    assemble_output(
        _OBJECTS,
        build_identifier_function(None),
        build_property_transform(False),
        resolve_output_options(options),
        pipeline,
        external_properties,
    )
    return pipeline


def test_minimal_run_builds_filters_and_serializes() -> None:
    """Without simplification or bind only build, filter, serialize run."""
    pipeline = _assemble(OutputOptions())

    assert pipeline.stages == ["build", "filter", "serialize"]


def test_filter_uses_zero_threshold_without_simplification() -> None:
    """Filter always runs, with a zero threshold when nothing was simplified."""
    pipeline = _assemble(OutputOptions(cartesian=True))

    assert ("filter", ("cartesian", 0.0)) in pipeline.calls


def test_simplify_and_filter_share_coordinate_system() -> None:
    """Simplify and filter receive the mode resolved for build."""
    pipeline = _assemble(OutputOptions(spherical=True, simplify=0.5, quantization=1000))

    assert pipeline.calls[:3] == [
        ("build", (["a"], "spherical", 1000)),
        ("simplify", ("spherical", 0.5, None)),
        ("filter", ("spherical", 0.5)),
    ]


def test_bind_runs_only_with_external_properties() -> None:
    """A populated external table adds a bind stage before serialize."""
    pipeline = _assemble(OutputOptions(), {"7": {"pop": 1200}})

    assert pipeline.stages == ["build", "filter", "bind", "serialize"]


def test_empty_external_table_skips_bind() -> None:
    """An empty table does not trigger binding."""
    pipeline = _assemble(OutputOptions(), {})

    assert "bind" not in pipeline.stages
