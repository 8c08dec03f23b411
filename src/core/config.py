"""Runtime configuration model for TopoIngest.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LATITUDE_COLUMN,
    DEFAULT_LONGITUDE_COLUMN,
    DEFAULT_QUANTIZATION,
)
from core.errors import ConfigError


@dataclass(frozen=True)
class TopoIngestConfig:
    """Validated runtime configuration.

    Attributes:
        quantization: Default quantization depth for topology build.
        shapefile_encoding: Default shapefile attribute encoding.
        longitude_column: Default longitude column for tabular input.
        latitude_column: Default latitude column for tabular input.
    """

    quantization: int
    shapefile_encoding: str | None
    longitude_column: str
    latitude_column: str

    @classmethod
    def from_env(cls) -> "TopoIngestConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ConfigError: If environment values are invalid.
        """
        quantization_value = os.getenv("TOPOINGEST_QUANTIZATION", str(DEFAULT_QUANTIZATION))
        return cls(
            quantization=_parse_quantization(quantization_value),
            shapefile_encoding=os.getenv("TOPOINGEST_SHAPEFILE_ENCODING") or None,
            longitude_column=_parse_column(
                "TOPOINGEST_LONGITUDE_COLUMN", DEFAULT_LONGITUDE_COLUMN
            ),
            latitude_column=_parse_column("TOPOINGEST_LATITUDE_COLUMN", DEFAULT_LATITUDE_COLUMN),
        )


def _parse_quantization(raw_value: str) -> int:
    """Parse the quantization environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed non-negative integer.

    Raises:
        ConfigError: If value is not a non-negative integer.
    """
    try:
        quantization = int(raw_value)
    except ValueError as error:
        raise ConfigError(
            "Invalid TOPOINGEST_QUANTIZATION value: "
            f"expected integer, got '{raw_value}'. "
            "Set TOPOINGEST_QUANTIZATION to a numeric value."
        ) from error
    if quantization < 0:
        raise ConfigError(
            f"Invalid TOPOINGEST_QUANTIZATION value: {quantization} is negative. "
            "Use 0 to disable quantization."
        )
    return quantization


def _parse_column(variable: str, default: str) -> str:
    """Read a column-name variable, rejecting blank values."""
    value = os.getenv(variable, default)
    if not value.strip():
        raise ConfigError(f"Invalid {variable} value: column name must not be blank.")
    return value
