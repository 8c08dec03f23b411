"""Unit tests for identifier derivation."""

from __future__ import annotations

from rules.identifier import build_identifier_function


def test_default_identifier_returns_record_id() -> None:
    """Without rules the record's own id should be returned."""
    identifier = build_identifier_function(None)

    assert identifier({"id": "r1", "properties": {"id": "other"}}) == "r1"


def test_identifier_skips_nan_from_numeric_coercion() -> None:
    """A numeric rule yielding NaN should fall through to the next rule."""
    identifier = build_identifier_function(["+code", "name"])

    assert identifier({"properties": {"code": "abc", "name": "X"}}) == "X"


def test_identifier_first_usable_rule_wins() -> None:
    """Earlier rules take precedence even when later rules also match."""
    identifier = build_identifier_function("+code,name")

    assert identifier({"properties": {"code": "42", "name": "X"}}) == 42


def test_identifier_skips_missing_values() -> None:
    """None and absent values should be skipped."""
    identifier = build_identifier_function("fips,name")

    assert identifier({"properties": {"fips": None, "name": "Y"}}) == "Y"


def test_identifier_stringifies_non_scalar_values() -> None:
    """Values that are neither numbers nor strings become strings."""
    identifier = build_identifier_function("flag")

    assert identifier({"properties": {"flag": True}}) == "True"


def test_identifier_returns_none_when_nothing_matches() -> None:
    """No usable value should yield None."""
    identifier = build_identifier_function("+code")

    assert identifier({"properties": {}}) is None
