"""Sequential ingestion orchestrator.

Readers run one at a time in input order. Each reader fills its own
staging map, which is committed only after the reader succeeds. The
first failure stops the run and discards everything read so far.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping

from core.errors import SourceReadError
from core.logging_config import get_logger
from core.types import NamedSources, QualifiedSource, ReaderOutcome, SourceFormat
from ingest.context import IngestContext
from ingest.json_reader import read_json_source
from ingest.shapefile_reader import read_shapefile_source
from ingest.tabular_reader import read_tabular_source

_LOGGER = get_logger(__name__)

Reader = Callable[[QualifiedSource, IngestContext, NamedSources], ReaderOutcome]

DEFAULT_READERS: Mapping[SourceFormat, Reader] = {
    "tabular": read_tabular_source,
    "shapefile": read_shapefile_source,
    "json": read_json_source,
}


def ingest_sources(
    sources: Iterable[QualifiedSource],
    context: IngestContext,
    readers: Mapping[SourceFormat, Reader] = DEFAULT_READERS,
) -> NamedSources:
    """Read every source in order into a new named source map.

    Args:
        sources: Sources in processing order.
        context: Read-only run context.
        readers: Reader per format tag.

    Returns:
        Named source map in input order, with topology objects expanded
        at the position of their file.

    Raises:
        SourceReadError: If any reader fails. Later readers do not run.
    """
    named_sources: NamedSources = {}
    source_count = 0
    for source in sources:
        staging = _run_reader(source, context, readers[source.source_format])
        named_sources.update(staging)
        source_count += 1
    _LOGGER.info(
        "ingest_completed",
        source_count=source_count,
        entry_count=len(named_sources),
        names=list(named_sources),
    )
    return named_sources


def _run_reader(source: QualifiedSource, context: IngestContext, reader: Reader) -> NamedSources:
    """Run one reader to completion and return its staged entries."""
    _LOGGER.info(
        "reader_started",
        source=source.name,
        path=str(source.path),
        source_format=source.source_format,
    )
    staging: NamedSources = {}
    outcome = reader(source, context, staging)
    if outcome.error is not None:
        _LOGGER.error(
            "reader_failed",
            source=source.name,
            path=str(source.path),
            error=str(outcome.error),
        )
        raise SourceReadError(source, outcome.error) from outcome.error
    _LOGGER.info(
        "reader_completed",
        source=source.name,
        entry_count=outcome.entry_count,
        names=list(staging),
    )
    return staging
