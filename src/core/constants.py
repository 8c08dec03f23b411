"""Core constants used across TopoIngest modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_LONGITUDE_COLUMN = "longitude"
DEFAULT_LATITUDE_COLUMN = "latitude"
DEFAULT_QUANTIZATION = 10000
EXTERNAL_ID_COLUMN = "id"
ROW_ID_COLUMN = "id"
NUMERIC_SIGIL = "+"
SPECIFIER_SEPARATOR = ","
QUALIFIER_SEPARATOR = "="
TOPOLOGY_TYPE = "Topology"
FEATURE_COLLECTION_TYPE = "FeatureCollection"
SHAPEFILE_EXTENSIONS = (".shp",)
TABULAR_EXTENSIONS = (".csv", ".tsv")
TAB_SEPARATED_EXTENSIONS = (".tsv",)
COMMA_SEPARATED_EXTENSIONS = (".csv",)
COORDINATE_SYSTEMS = ("spherical", "cartesian", "auto")
