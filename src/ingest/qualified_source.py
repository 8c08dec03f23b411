"""Qualified input references and format dispatch.

This module splits ``name=path`` arguments and resolves the reader
strategy for each file once, before any reader is scheduled.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.constants import QUALIFIER_SEPARATOR, SHAPEFILE_EXTENSIONS, TABULAR_EXTENSIONS
from core.errors import ConfigError
from core.types import QualifiedSource, SourceFormat


def parse_qualified_source(argument: str) -> QualifiedSource:
    """Parse one input argument into a qualified source.

    Args:
        argument: ``name=path`` or a bare path.

    Returns:
        Source with resolved name and reader format.

    Raises:
        ConfigError: If the argument has no path.
    """
    name, separator, path_value = argument.partition(QUALIFIER_SEPARATOR)
    if not separator or not name:
        name, path_value = "", argument
    if not path_value:
        raise ConfigError(
            f"Invalid input '{argument}': expected a file path or name=path. "
            "Provide a path after the '=' qualifier."
        )
    path = Path(path_value).expanduser()
    return QualifiedSource(
        name=name or _default_source_name(path),
        path=path,
        source_format=resolve_source_format(path),
    )


def plan_sources(arguments: Iterable[str]) -> list[QualifiedSource]:
    """Parse all input arguments, preserving argument order."""
    return [parse_qualified_source(argument) for argument in arguments]


def resolve_source_format(path: Path) -> SourceFormat:
    """Return the reader format tag for a file path."""
    suffix = path.suffix.lower()
    if suffix in SHAPEFILE_EXTENSIONS:
        return "shapefile"
    if suffix in TABULAR_EXTENSIONS:
        return "tabular"
    return "json"


def _default_source_name(path: Path) -> str:
    return path.stem or path.name
