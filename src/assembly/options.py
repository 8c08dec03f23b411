"""Output option validation.

Conflicting flags are rejected here, before any file is read.
"""

from __future__ import annotations

from core.errors import ConfigError
from core.types import CoordinateSystem, OutputOptions, ResolvedOutputOptions


def resolve_output_options(options: OutputOptions) -> ResolvedOutputOptions:
    """Validate raw output options and resolve the coordinate system.

    Args:
        options: Output options as configured by the caller.

    Returns:
        Validated options for the topology pipeline.

    Raises:
        ConfigError: If options conflict or are out of range.
    """
    if options.spherical and options.cartesian:
        raise ConfigError(
            "Conflicting coordinate systems: --spherical and --cartesian are mutually exclusive."
        )
    if options.simplify is not None and options.simplify_proportion is not None:
        raise ConfigError(
            "Conflicting simplification modes: use either an absolute threshold "
            "or a retained proportion, not both."
        )
    if options.simplify is not None and options.simplify < 0:
        raise ConfigError(f"Invalid simplification threshold {options.simplify}: must be >= 0.")
    if options.simplify_proportion is not None and not 0 <= options.simplify_proportion <= 1:
        raise ConfigError(
            f"Invalid simplification proportion {options.simplify_proportion}: "
            "must be within [0, 1]."
        )
    if options.quantization < 0:
        raise ConfigError(
            f"Invalid quantization {options.quantization}: use 0 to disable quantization."
        )
    return ResolvedOutputOptions(
        coordinate_system=_resolve_coordinate_system(options),
        quantization=options.quantization,
        simplify=options.simplify,
        simplify_proportion=options.simplify_proportion,
        output=options.output,
    )


def _resolve_coordinate_system(options: OutputOptions) -> CoordinateSystem:
    if options.spherical:
        return "spherical"
    if options.cartesian:
        return "cartesian"
    return "auto"
