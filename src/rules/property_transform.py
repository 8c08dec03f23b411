"""Property renaming and coercion.

This module interprets property rules when copying attributes into a
destination mapping. Three modes are supported: keep nothing, keep
everything verbatim, or apply an explicit rule table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, MutableMapping

from core.errors import RuleError
from core.types import PropertySpecifiers
from rules.specifiers import PropertyRule, coerce_number, parse_property_specifiers


class TransformMode(str, Enum):
    """Property transform dispatch strategy."""

    NONE = "none"
    ALL = "all"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class PropertyTransform:
    """Callable property transform over an immutable rule table.

    Calling the transform with ``(target, key, value)`` writes into
    ``target`` and returns whether a write happened.

    Attributes:
        mode: Dispatch strategy.
        rules: Rule table keyed by source property name.
    """

    mode: TransformMode = TransformMode.NONE
    rules: Mapping[str, PropertyRule] = field(default_factory=dict)

    def __call__(self, target: MutableMapping[str, object], key: str, value: object) -> bool:
        if self.mode is TransformMode.NONE:
            return False
        if self.mode is TransformMode.ALL:
            target[key] = value
            return True
        return apply_property_rule(self.rules.get(key), target, value)


def apply_property_rule(
    rule: PropertyRule | None,
    target: MutableMapping[str, object],
    value: object,
) -> bool:
    """Apply a single rule, returning False when nothing was written.

    Args:
        rule: Matching rule, or None when no rule matched the key.
        target: Destination properties.
        value: Raw source value.

    Returns:
        Whether the destination was written.
    """
    if rule is None or value is None:
        return False
    target[rule.target_key] = coerce_number(value) if rule.numeric else value
    return True


def build_property_transform(specifiers: PropertySpecifiers = False) -> PropertyTransform:
    """Compile property specifiers into a property transform.

    Args:
        specifiers: ``True`` keeps every property, ``False`` or None keeps
            none, a string or sequence is parsed as explicit rules.

    Returns:
        Property transform.

    Raises:
        RuleError: If a specifier is malformed or the value type is unsupported.
    """
    if specifiers is True:
        return PropertyTransform(mode=TransformMode.ALL)
    if specifiers is False or specifiers is None:
        return PropertyTransform(mode=TransformMode.NONE)
    if not isinstance(specifiers, (str, list, tuple)):
        raise RuleError(
            f"Unsupported property specifiers of type {type(specifiers).__name__}: "
            "expected True, False, a string, or a list of strings."
        )
    rules = parse_property_specifiers(specifiers)
    return PropertyTransform(
        mode=TransformMode.EXPLICIT,
        rules=MappingProxyType({rule.source_key: rule for rule in rules}),
    )
