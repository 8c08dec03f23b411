"""TopoIngest CLI entry point.

This module maps command-line flags onto ingest and output options,
runs ingestion, and hands the result to the topology pipeline.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from assembly.contract import TopologyPipeline, assemble_output
from assembly.options import resolve_output_options
from assembly.topojson_pipeline import TopojsonPipeline
from core.config import TopoIngestConfig
from core.errors import ConfigError, RuleError, TopoIngestError
from core.logging_config import get_logger
from core.types import IngestOptions, OutputOptions
from ingest.context import build_ingest_context
from ingest.pipeline import run_ingest

_LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_parser(config: TopoIngestConfig) -> argparse.ArgumentParser:
    """Build the CLI parser with defaults taken from runtime config.

    Args:
        config: Runtime configuration providing defaults.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="topoingest",
        description="Merge tabular, shapefile, and GeoJSON/TopoJSON sources into one topology",
    )
    parser.add_argument("inputs", nargs="+", help="Input files, optionally as name=path")
    parser.add_argument("-o", "--out", help="Output file, defaults to stdout")
    parser.add_argument(
        "--id-property",
        help="Comma-separated properties used as feature id; prefix with + to coerce to number",
    )
    parser.add_argument(
        "-p",
        "--properties",
        nargs="?",
        const=True,
        default=False,
        help="Properties to keep: target, target=source, +source; no value keeps all",
    )
    parser.add_argument(
        "-e",
        "--external-properties",
        action="append",
        default=[],
        help="Delimited file with an id column joined into output properties",
    )
    parser.add_argument(
        "--shapefile-encoding",
        default=config.shapefile_encoding,
        help="Character encoding for shapefile attributes",
    )
    parser.add_argument(
        "--ignore-shapefile-properties",
        action="store_true",
        help="Read shapefile geometry only",
    )
    parser.add_argument(
        "--longitude", default=config.longitude_column, help="Longitude column for CSV/TSV input"
    )
    parser.add_argument(
        "--latitude", default=config.latitude_column, help="Latitude column for CSV/TSV input"
    )
    parser.add_argument(
        "-q",
        "--quantization",
        type=int,
        default=config.quantization,
        help="Quantization depth, 0 disables quantization",
    )
    parser.add_argument("-s", "--simplify", type=float, help="Absolute simplification threshold")
    parser.add_argument(
        "--simplify-proportion",
        type=float,
        help="Proportion of points to retain during simplification",
    )
    parser.add_argument("--cartesian", action="store_true", help="Use cartesian coordinates")
    parser.add_argument("--spherical", action="store_true", help="Use spherical coordinates")
    return parser


def main(argv: Sequence[str] | None = None, pipeline: TopologyPipeline | None = None) -> int:
    """Run the TopoIngest CLI.

    Args:
        argv: Optional argument vector.
        pipeline: Optional topology pipeline; defaults to the topojson pipeline.

    Returns:
        Process exit code.
    """
    try:
        config = TopoIngestConfig.from_env()
    except ConfigError as error:
        _LOGGER.error("configuration_invalid", error=str(error))
        return EXIT_CONFIG_ERROR
    args = build_parser(config).parse_args(argv)
    ingest_options = _build_ingest_options(args)
    try:
        output_options = resolve_output_options(_build_output_options(args))
        context = build_ingest_context(ingest_options)
    except (ConfigError, RuleError) as error:
        _LOGGER.error("configuration_invalid", error=str(error))
        return EXIT_CONFIG_ERROR
    try:
        result = run_ingest(ingest_options, context)
        assemble_output(
            result.objects,
            result.identifier,
            result.property_transform,
            output_options,
            pipeline or TopojsonPipeline(),
            result.external_properties,
        )
    except ConfigError as error:
        _LOGGER.error("configuration_invalid", error=str(error))
        return EXIT_CONFIG_ERROR
    except TopoIngestError as error:
        _LOGGER.error("topoingest_failed", error=str(error), error_type=type(error).__name__)
        return EXIT_FAILURE
    return EXIT_OK


def _build_ingest_options(args: argparse.Namespace) -> IngestOptions:
    """Build ingest options from parsed CLI args."""
    return IngestOptions(
        inputs=tuple(args.inputs),
        id_properties=args.id_property,
        properties=args.properties,
        longitude=args.longitude,
        latitude=args.latitude,
        shapefile_encoding=args.shapefile_encoding,
        ignore_shapefile_properties=args.ignore_shapefile_properties,
        external_properties=tuple(args.external_properties),
    )


def _build_output_options(args: argparse.Namespace) -> OutputOptions:
    """Build raw output options from parsed CLI args."""
    return OutputOptions(
        spherical=args.spherical,
        cartesian=args.cartesian,
        quantization=args.quantization,
        simplify=args.simplify,
        simplify_proportion=args.simplify_proportion,
        output=Path(args.out).expanduser() if args.out else None,
    )
