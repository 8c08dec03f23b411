"""Shared typed models.

This module defines immutable data models used by the rule engine,
readers, orchestrator, and output assembly to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Sequence, Union

from core.constants import (
    DEFAULT_LATITUDE_COLUMN,
    DEFAULT_LONGITUDE_COLUMN,
    DEFAULT_QUANTIZATION,
)
from core.errors import IngestError

SourceFormat = Literal["tabular", "shapefile", "json"]
CoordinateSystem = Literal["spherical", "cartesian", "auto"]

Feature = dict[str, Any]
FeatureCollection = dict[str, Any]
NamedSources = dict[str, Any]
ExternalPropertiesTable = dict[str, dict[str, object]]
PropertySpecifiers = Union[bool, str, Sequence[str], None]


@dataclass(frozen=True)
class QualifiedSource:
    """Input file reference resolved before scheduling.

    Attributes:
        name: Source identifier used as key in the named source map.
        path: Filesystem path of the input file.
        source_format: Reader strategy selected from the file extension.
    """

    name: str
    path: Path
    source_format: SourceFormat


@dataclass(frozen=True)
class ReaderOutcome:
    """Single completion result reported by a format reader.

    Attributes:
        source: Source the reader processed.
        entry_count: Number of features or named entries produced.
        error: Failure cause, or None when the reader succeeded.
    """

    source: QualifiedSource
    entry_count: int = 0
    error: IngestError | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the reader completed without error."""
        return self.error is None


@dataclass(frozen=True)
class IngestOptions:
    """Ingestion options.

    Attributes:
        inputs: Qualified file references in processing order.
        id_properties: Identifier specifiers, or None for the default id.
        properties: Property transform specifiers or a True/False sentinel.
        longitude: Longitude column name for tabular input.
        latitude: Latitude column name for tabular input.
        shapefile_encoding: Optional character encoding for shapefile attributes.
        ignore_shapefile_properties: Drop shapefile attributes when True.
        external_properties: Delimited files joined into the external table.
    """

    inputs: tuple[str, ...]
    id_properties: str | Sequence[str] | None = None
    properties: PropertySpecifiers = False
    longitude: str = DEFAULT_LONGITUDE_COLUMN
    latitude: str = DEFAULT_LATITUDE_COLUMN
    shapefile_encoding: str | None = None
    ignore_shapefile_properties: bool = False
    external_properties: tuple[str, ...] = ()


@dataclass(frozen=True)
class OutputOptions:
    """Raw output options before validation.

    Attributes:
        spherical: Force spherical coordinates.
        cartesian: Force cartesian coordinates.
        quantization: Quantization depth, zero disables quantization.
        simplify: Absolute simplification threshold.
        simplify_proportion: Proportion of points to retain.
        output: Output file path, or None for stdout.
    """

    spherical: bool = False
    cartesian: bool = False
    quantization: int = DEFAULT_QUANTIZATION
    simplify: float | None = None
    simplify_proportion: float | None = None
    output: Path | None = None


@dataclass(frozen=True)
class ResolvedOutputOptions:
    """Validated output options handed to the topology pipeline.

    Attributes:
        coordinate_system: Resolved coordinate-system mode.
        quantization: Quantization depth.
        simplify: Absolute simplification threshold when requested.
        simplify_proportion: Retained point proportion when requested.
        output: Output file path, or None for stdout.
    """

    coordinate_system: CoordinateSystem
    quantization: int
    simplify: float | None
    simplify_proportion: float | None
    output: Path | None

    @property
    def simplification_requested(self) -> bool:
        """Return whether either simplification mode was configured."""
        return self.simplify is not None or self.simplify_proportion is not None
