"""TopoIngest exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.types import QualifiedSource


class TopoIngestError(Exception):
    """Base exception for all TopoIngest failures."""


class ConfigError(TopoIngestError):
    """Raised for invalid runtime configuration or conflicting options."""


class RuleError(TopoIngestError):
    """Raised for malformed identifier or property specifiers."""


class IngestError(TopoIngestError):
    """Raised for source parsing and ingest failures."""


class SourceReadError(IngestError):
    """Raised when a reader fails and ingestion is aborted.

    Attributes:
        source: Qualified source whose reader failed.
        cause: Underlying reader error.
    """

    def __init__(self, source: "QualifiedSource", cause: BaseException) -> None:
        super().__init__(f"Failed to ingest '{source.name}' from {source.path}: {cause}")
        self.source = source
        self.cause = cause


class ExternalPropertiesError(TopoIngestError):
    """Raised when an external properties file cannot be joined."""


class AssemblyError(TopoIngestError):
    """Raised for topology build, simplify, or serialization failures."""
