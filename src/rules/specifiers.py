"""Declarative rule parsing for identifiers and property transforms.

This module turns comma-separated specifier strings into small immutable
rule structs. Interpretation lives in the identifier and transform modules.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Sequence

from core.constants import NUMERIC_SIGIL, QUALIFIER_SEPARATOR, SPECIFIER_SEPARATOR
from core.errors import RuleError

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX_PATTERNS = (
    (re.compile(r"0[xX]([0-9a-fA-F]+)"), 16),
    (re.compile(r"0[oO]([0-7]+)"), 8),
    (re.compile(r"0[bB]([01]+)"), 2),
)
_INFINITY_PATTERN = re.compile(r"([+-]?)Infinity")


@dataclass(frozen=True)
class IdentifierRule:
    """One identifier candidate.

    Attributes:
        property_name: Feature property read for the identifier.
        numeric: Coerce the raw value to a number before use.
    """

    property_name: str
    numeric: bool = False


@dataclass(frozen=True)
class PropertyRule:
    """One property rename/coercion rule.

    Attributes:
        source_key: Input property name the rule matches.
        target_key: Output property name written on match.
        numeric: Coerce the raw value to a number before writing.
    """

    source_key: str
    target_key: str
    numeric: bool = False


def split_specifiers(specifiers: str | Sequence[str] | None) -> list[str]:
    """Split a comma-separated specifier string or list into entries.

    Blank entries are dropped; list items may themselves contain commas.
    """
    if specifiers is None:
        return []
    if isinstance(specifiers, str):
        specifiers = [specifiers]
    entries: list[str] = []
    for specifier in specifiers:
        entries.extend(
            part.strip() for part in specifier.split(SPECIFIER_SEPARATOR) if part.strip()
        )
    return entries


def parse_identifier_specifiers(
    specifiers: str | Sequence[str] | None,
) -> tuple[IdentifierRule, ...]:
    """Parse identifier specifiers such as ``"+code,name"``.

    Args:
        specifiers: Comma-separated string or sequence of property names.

    Returns:
        Identifier rules in precedence order.

    Raises:
        RuleError: If an entry has no property name.
    """
    rules: list[IdentifierRule] = []
    for entry in split_specifiers(specifiers):
        numeric = entry.startswith(NUMERIC_SIGIL)
        property_name = entry[1:] if numeric else entry
        if not property_name:
            raise RuleError(
                f"Invalid identifier specifier '{entry}': expected a property name "
                "after the numeric sigil."
            )
        rules.append(IdentifierRule(property_name=property_name, numeric=numeric))
    return tuple(rules)


def parse_property_specifiers(
    specifiers: str | Sequence[str] | None,
) -> tuple[PropertyRule, ...]:
    """Parse property transform specifiers.

    Accepted entries are ``target``, ``target=source``, ``+source`` and
    ``target=+source``.

    Args:
        specifiers: Comma-separated string or sequence of entries.

    Returns:
        Property rules in declaration order.

    Raises:
        RuleError: If an entry has an empty source.
    """
    return tuple(_parse_property_entry(entry) for entry in split_specifiers(specifiers))


def _parse_property_entry(entry: str) -> PropertyRule:
    target, separator, source = entry.partition(QUALIFIER_SEPARATOR)
    if not separator:
        target, source = "", entry
    target, source = target.strip(), source.strip()
    numeric = source.startswith(NUMERIC_SIGIL)
    if numeric:
        source = source[1:]
    if not source:
        raise RuleError(
            f"Invalid property specifier '{entry}': expected a source property name. "
            "Use target, target=source, +source or target=+source."
        )
    return PropertyRule(source_key=source, target_key=target or source, numeric=numeric)


def coerce_number(value: object) -> int | float:
    """Coerce a raw value to a number, returning NaN when impossible.

    Accepted text is a signed decimal with an optional exponent, an
    unsigned ``0x``/``0o``/``0b`` integer, or a signed ``Infinity``.
    Integral decimals become ints, other decimals become floats.
    Booleans count as 1 and 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    if _DECIMAL_PATTERN.fullmatch(text):
        return float(text)
    for pattern, base in _RADIX_PATTERNS:
        radix_match = pattern.fullmatch(text)
        if radix_match is not None:
            return int(radix_match.group(1), base)
    infinity_match = _INFINITY_PATTERN.fullmatch(text)
    if infinity_match is not None:
        return -math.inf if infinity_match.group(1) == "-" else math.inf
    return math.nan


def is_number(value: object) -> bool:
    """Return whether a value is a real number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
