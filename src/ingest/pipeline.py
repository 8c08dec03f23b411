"""Ingest orchestration for topology assembly.

This module compiles the rule engine, joins external properties, and
reads every geometry source, producing the inputs of the output stage.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.logging_config import get_logger
from core.types import ExternalPropertiesTable, IngestOptions, NamedSources
from ingest.context import IngestContext, build_ingest_context
from ingest.external_properties import load_external_properties
from ingest.orchestrator import ingest_sources
from ingest.qualified_source import plan_sources
from rules.identifier import IdentifierFunction
from rules.property_transform import PropertyTransform

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Everything the output stage consumes from one ingest run.

    Attributes:
        objects: Named geometry sources in input order.
        identifier: Compiled identifier function.
        property_transform: Compiled property transform.
        external_properties: Joined external table, empty when none configured.
    """

    objects: NamedSources
    identifier: IdentifierFunction
    property_transform: PropertyTransform
    external_properties: ExternalPropertiesTable


def run_ingest(options: IngestOptions, context: IngestContext | None = None) -> IngestResult:
    """Run the ingest stage for a set of inputs.

    Args:
        options: Ingest options.
        context: Optional prebuilt context; compiled from options when omitted.

    Returns:
        Ingest result for output assembly.

    Raises:
        ConfigError: If an input reference is malformed.
        RuleError: If rule specifiers are malformed.
        ExternalPropertiesError: If an external file cannot be joined.
        SourceReadError: If any geometry source fails to read.
    """
    sources = plan_sources(options.inputs)
    context = context or build_ingest_context(options)
    external_properties = load_external_properties(
        options.external_properties, context.property_transform
    )
    objects = ingest_sources(sources, context)
    _LOGGER.info(
        "ingest_run_completed",
        input_count=len(sources),
        object_count=len(objects),
        external_id_count=len(external_properties),
    )
    return IngestResult(
        objects=objects,
        identifier=context.identifier,
        property_transform=context.property_transform,
        external_properties=external_properties,
    )
