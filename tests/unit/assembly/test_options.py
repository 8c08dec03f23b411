"""Unit tests for output option validation."""

from __future__ import annotations

import pytest

from assembly.options import resolve_output_options
from core.errors import ConfigError
from core.types import OutputOptions


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        (OutputOptions(), "auto"),
        (OutputOptions(spherical=True), "spherical"),
        (OutputOptions(cartesian=True), "cartesian"),
    ],
)
def test_coordinate_system_resolution(options: OutputOptions, expected: str) -> None:
    """Flags should resolve to one coordinate-system mode."""
    assert resolve_output_options(options).coordinate_system == expected


@pytest.mark.parametrize(
    "options",
    [
        OutputOptions(spherical=True, cartesian=True),
        OutputOptions(simplify=0.5, simplify_proportion=0.2),
        OutputOptions(simplify=-1.0),
        OutputOptions(simplify_proportion=1.5),
        OutputOptions(quantization=-1),
    ],
)
def test_conflicting_or_invalid_options_raise(options: OutputOptions) -> None:
    """Conflicts and out-of-range values are configuration errors."""
    with pytest.raises(ConfigError):
        resolve_output_options(options)


def test_simplification_requested_flag() -> None:
    """Either simplification mode counts as requested."""
    resolved = resolve_output_options(OutputOptions(simplify_proportion=0.25))

    assert resolved.simplification_requested is True
