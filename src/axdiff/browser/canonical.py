# Canonical forms for accessibility attribute values.
# Created: 2026-10-17
#
# Two values that are semantically equal (same shape, same scalar leaves,
# mapping key order irrelevant) produce byte-identical canonical text.
"""Deterministic, key-order-independent comparison of attribute values."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

_SCALARS = (str, int, float, bool)
_MISSING_TOKEN = "\x00undefined"


class _Missing:
    """Marker for an attribute that is absent on one side of a comparison."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def sanitize(value: Any) -> Any:
    """Convert an attribute value into its stored, JSON-like form.

    Scalars pass through. Lists and tuples keep their order. Mappings are
    rebuilt with entries sorted by key. Sets become lists sorted by canonical
    text. Anything else (and self-referencing containers) is stringified.
    Values nested deeper than the interpreter can walk collapse to their
    type name, e.g. ``<list>``.
    """
    try:
        return _sanitize(value, set())
    except RecursionError:
        return _type_marker(value)


def _sanitize(value: Any, active: set[int]) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value

    if isinstance(value, (list, tuple, Mapping, set, frozenset)):
        marker = id(value)
        if marker in active:
            return _fallback(value)
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                entries = sorted(
                    ((str(key), _sanitize(val, active)) for key, val in value.items()),
                    key=lambda entry: entry[0],
                )
                return dict(entries)
            if isinstance(value, (set, frozenset)):
                items = [_sanitize(item, active) for item in value]
                return sorted(items, key=_dumps)
            return [_sanitize(item, active) for item in value]
        finally:
            active.discard(marker)

    return _fallback(value)


def _type_marker(value: Any) -> str:
    return f"<{type(value).__name__}>"


def _fallback(value: Any) -> str:
    # str() of a deeply nested container recurses as well
    try:
        return str(value)
    except Exception:
        return _type_marker(value)


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=_fallback,
    )


def canonicalize(value: Any) -> str:
    """Return the canonical text of a value. Never raises."""
    if value is MISSING:
        return _MISSING_TOKEN
    try:
        return _dumps(sanitize(value))
    except RecursionError:
        return _dumps(_type_marker(value))


def values_equal(left: Any, right: Any) -> bool:
    """Equality by canonical text."""
    return canonicalize(left) == canonicalize(right)


__all__ = ["MISSING", "canonicalize", "sanitize", "values_equal"]
