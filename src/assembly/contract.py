"""Output assembly contract.

Defines the stage interface of the downstream topology pipeline and the
order in which the stages run over ingested sources.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.logging_config import get_logger
from core.types import (
    CoordinateSystem,
    ExternalPropertiesTable,
    NamedSources,
    ResolvedOutputOptions,
)
from rules.identifier import IdentifierFunction
from rules.property_transform import PropertyTransform

_LOGGER = get_logger(__name__)


class TopologyPipeline(Protocol):
    """Stages of the topology build, simplify, filter, bind, serialize chain."""

    def build(
        self,
        objects: NamedSources,
        coordinate_system: CoordinateSystem,
        quantization: int,
        identifier: IdentifierFunction,
        property_transform: PropertyTransform,
    ) -> Any: ...

    def simplify(
        self,
        topology: Any,
        coordinate_system: CoordinateSystem,
        threshold: float | None,
        proportion: float | None,
    ) -> Any: ...

    def filter(self, topology: Any, coordinate_system: CoordinateSystem, threshold: float) -> Any: ...

    def bind(self, topology: Any, external_properties: ExternalPropertiesTable) -> Any: ...

    def serialize(self, topology: Any, options: ResolvedOutputOptions) -> Any: ...


def assemble_output(
    objects: NamedSources,
    identifier: IdentifierFunction,
    property_transform: PropertyTransform,
    options: ResolvedOutputOptions,
    pipeline: TopologyPipeline,
    external_properties: ExternalPropertiesTable | None = None,
) -> Any:
    """Run the topology pipeline over ingested sources.

    Build always runs, simplify only when requested, filter always (with a
    zero threshold when no simplification was requested), bind only when
    external properties were joined, then serialize. Simplify and filter
    use the coordinate system resolved for build.

    Args:
        objects: Named geometry sources from ingestion.
        identifier: Identifier function for topology geometries.
        property_transform: Property transform for topology geometries.
        options: Validated output options.
        pipeline: Topology pipeline implementation.
        external_properties: Joined external table, if any.

    Returns:
        Whatever the pipeline's serialize stage returns.
    """
    coordinate_system = options.coordinate_system
    topology = pipeline.build(
        objects, coordinate_system, options.quantization, identifier, property_transform
    )
    filter_threshold = 0.0
    if options.simplification_requested:
        topology = pipeline.simplify(
            topology, coordinate_system, options.simplify, options.simplify_proportion
        )
        filter_threshold = options.simplify or 0.0
    topology = pipeline.filter(topology, coordinate_system, filter_threshold)
    if external_properties:
        topology = pipeline.bind(topology, external_properties)
    _LOGGER.info(
        "output_assembled",
        object_count=len(objects),
        coordinate_system=coordinate_system,
        quantization=options.quantization,
        simplified=options.simplification_requested,
        bound=bool(external_properties),
    )
    return pipeline.serialize(topology, options)
