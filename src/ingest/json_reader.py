"""GeoJSON and topology reader.

Plain JSON documents are stored under the source name. Topology
documents are rehydrated: every named object is decoded and stored
under its own name instead of the file's name.
"""

from __future__ import annotations

import json
from typing import Any

from core.constants import TOPOLOGY_TYPE
from core.errors import IngestError
from core.types import NamedSources, QualifiedSource, ReaderOutcome
from ingest.context import IngestContext


def read_json_source(
    source: QualifiedSource,
    context: IngestContext,
    staging: NamedSources,
) -> ReaderOutcome:
    """Read a GeoJSON or topology file into the staging map.

    Args:
        source: JSON source reference.
        context: Run context providing the topology decoder.
        staging: Map receiving one entry, or one entry per topology object.

    Returns:
        Reader outcome carrying the number of named entries or the failure.
    """
    try:
        document = load_json_document(source)
        entries = expand_document(source, document, context)
    except IngestError as error:
        return ReaderOutcome(source=source, error=error)
    staging.update(entries)
    return ReaderOutcome(source=source, entry_count=len(entries))


def load_json_document(source: QualifiedSource) -> Any:
    """Parse the whole file as one JSON document.

    Raises:
        IngestError: If the file is unreadable or not valid JSON.
    """
    try:
        text = source.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise IngestError(f"Failed to read JSON source {source.path}: {error}.") from error
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise IngestError(
            f"Failed to parse JSON source {source.path}:{error.lineno}:{error.colno}: "
            f"{error.msg}. Fix the JSON syntax and retry."
        ) from error


def expand_document(
    source: QualifiedSource,
    document: Any,
    context: IngestContext,
) -> dict[str, Any]:
    """Return the named entries a document contributes, in object order."""
    if not is_topology(document):
        return {source.name: document}
    objects = document.get("objects")
    if not isinstance(objects, dict):
        raise IngestError(
            f"Invalid topology {source.path}: expected an 'objects' mapping of named geometries."
        )
    entries: dict[str, Any] = {}
    for object_name, topology_object in objects.items():
        if not isinstance(topology_object, dict):
            raise IngestError(
                f"Invalid topology object '{object_name}' in {source.path}: "
                f"expected a geometry object, got {type(topology_object).__name__}."
            )
        try:
            entries[object_name] = context.decoder(document, topology_object)
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as error:
            raise IngestError(
                f"Failed to decode topology object '{object_name}' in {source.path}: {error!r}."
            ) from error
    return entries


def is_topology(document: Any) -> bool:
    """Return whether a parsed document is a built topology."""
    return isinstance(document, dict) and document.get("type") == TOPOLOGY_TYPE
