"""Feature identifier derivation.

This module interprets identifier rules against feature-like records.
The first rule producing a usable value wins.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Mapping, Sequence

from rules.specifiers import IdentifierRule, coerce_number, is_number, parse_identifier_specifiers


@dataclass(frozen=True)
class IdentifierFunction:
    """Callable identifier derivation over an immutable rule table.

    Attributes:
        rules: Identifier rules in precedence order. Empty means the
            record's own ``id`` field is returned.
    """

    rules: tuple[IdentifierRule, ...] = ()

    def __call__(self, record: Mapping[str, object]) -> object | None:
        if not self.rules:
            return record.get("id")
        properties = record.get("properties") or {}
        for rule in self.rules:
            identifier = resolve_identifier(rule, properties)
            if identifier is not None:
                return identifier
        return None


def resolve_identifier(rule: IdentifierRule, properties: Mapping[str, object]) -> object | None:
    """Resolve one identifier rule, returning None when the value is unusable.

    Args:
        rule: Identifier rule to evaluate.
        properties: Record properties.

    Returns:
        Usable identifier value or None.
    """
    value = properties.get(rule.property_name)
    if value is None:
        return None
    if rule.numeric:
        value = coerce_number(value)
    if is_number(value):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        return value
    return str(value)


def build_identifier_function(
    specifiers: str | Sequence[str] | None = None,
) -> IdentifierFunction:
    """Compile identifier specifiers into an identifier function.

    Args:
        specifiers: Comma-separated property names, each optionally prefixed
            with ``+`` for numeric coercion. None selects the default.

    Returns:
        Identifier function.

    Raises:
        RuleError: If a specifier is malformed.
    """
    return IdentifierFunction(rules=parse_identifier_specifiers(specifiers))
