"""Public SDK surface for TopoIngest.

This module provides a stable import path for library users.
It re-exports the ingest and assembly entry points and typed options.
"""

from __future__ import annotations

from assembly.contract import TopologyPipeline, assemble_output
from assembly.options import resolve_output_options
from assembly.topojson_pipeline import TopojsonPipeline
from core.config import TopoIngestConfig
from core.types import IngestOptions, OutputOptions, QualifiedSource, ResolvedOutputOptions
from ingest.context import IngestContext, build_ingest_context
from ingest.external_properties import load_external_properties
from ingest.orchestrator import ingest_sources
from ingest.pipeline import IngestResult, run_ingest
from ingest.qualified_source import parse_qualified_source, plan_sources
from ingest.topology_decoder import decode_topology_object
from rules.identifier import IdentifierFunction, build_identifier_function
from rules.property_transform import PropertyTransform, TransformMode, build_property_transform

__all__ = [
    "IdentifierFunction",
    "IngestContext",
    "IngestOptions",
    "IngestResult",
    "OutputOptions",
    "PropertyTransform",
    "QualifiedSource",
    "ResolvedOutputOptions",
    "TopoIngestConfig",
    "TopojsonPipeline",
    "TopologyPipeline",
    "TransformMode",
    "assemble_output",
    "build_identifier_function",
    "build_ingest_context",
    "build_property_transform",
    "decode_topology_object",
    "ingest_sources",
    "load_external_properties",
    "parse_qualified_source",
    "plan_sources",
    "resolve_output_options",
    "run_ingest",
]
