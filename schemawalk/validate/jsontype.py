"""JSON type names and equality for Python-native JSON trees."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

#: Primitive type names shared by every supported draft.
PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {"array", "boolean", "integer", "null", "number", "object", "string"}
)


def json_type(value: Any) -> str:
    """Return the JSON type name of ``value``.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        return "array"
    return type(value).__name__


def is_number(value: Any) -> bool:
    return json_type(value) in ("integer", "number")


def type_matches(expected: str, value: Any) -> bool:
    """``True`` if ``value`` is of primitive type ``expected``."""
    actual = json_type(value)
    return actual == expected or (expected == "number" and actual == "integer")


def json_equal(left: Any, right: Any) -> bool:
    """Structural JSON equality (``True`` never equals ``1``)."""
    left_type, right_type = json_type(left), json_type(right)
    if is_number(left) and is_number(right):
        return left == right
    if left_type != right_type:
        return False
    if left_type == "array":
        return len(left) == len(right) and all(
            json_equal(a, b) for a, b in zip(left, right)
        )
    if left_type == "object":
        return left.keys() == right.keys() and all(
            json_equal(left[key], right[key]) for key in left
        )
    return left == right
