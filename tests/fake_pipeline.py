"""Recording topology pipeline shared by assembly and CLI tests."""

from __future__ import annotations

from typing import Any


class RecordingPipeline:
    """Pipeline double that records stage calls and their arguments."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def build(
        self,
        objects: dict[str, Any],
        coordinate_system: str,
        quantization: int,
        identifier: Any,
        property_transform: Any,
    ) -> dict[str, Any]:
        self.calls.append(("build", (list(objects), coordinate_system, quantization)))
        return {"objects": dict(objects)}

    def simplify(
        self,
        topology: Any,
        coordinate_system: str,
        threshold: float | None,
        proportion: float | None,
    ) -> Any:
        self.calls.append(("simplify", (coordinate_system, threshold, proportion)))
        return topology

    def filter(self, topology: Any, coordinate_system: str, threshold: float) -> Any:
        self.calls.append(("filter", (coordinate_system, threshold)))
        return topology

    def bind(self, topology: Any, external_properties: dict[str, Any]) -> Any:
        self.calls.append(("bind", dict(external_properties)))
        return topology

    def serialize(self, topology: Any, options: Any) -> Any:
        self.calls.append(("serialize", options.output))
        return topology

    @property
    def stages(self) -> list[str]:
        """Return stage names in call order."""
        return [name for name, _ in self.calls]
