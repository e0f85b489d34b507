"""Schema syntax rules.

Syntax checking is shallow: only the keywords of the current schema node are
inspected.  Nested schemas are checked when validation descends into them,
so a broken branch fails only that branch.

Each :class:`SyntaxRule` names the JSON types a keyword value may have and,
optionally, a further check returning a problem description (or ``None``).
"""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from schemawalk.schema.report import ValidationReport
from schemawalk.validate.jsontype import PRIMITIVE_TYPES, json_equal, json_type

if TYPE_CHECKING:
    from schemawalk.schema.context import ValidationContext

#: Suffix appended to the instance path of schema-level reports.
SCHEMA_REPORT_SUFFIX = " [schema]"


@dataclass(frozen=True)
class SyntaxRule:
    """Allowed value types for one keyword, plus an optional extra check."""

    types: frozenset[str]
    check: Callable[[Any], str | None] | None = None


def _rule(*types: str, check: Callable[[Any], str | None] | None = None) -> SyntaxRule:
    return SyntaxRule(frozenset(types), check)


def check_schema_syntax(
    ctx: ValidationContext, rules: Mapping[str, SyntaxRule]
) -> ValidationReport:
    """Check every known keyword of ``ctx``'s current schema against ``rules``."""
    report = ctx.report(SCHEMA_REPORT_SUFFIX)
    for keyword, value in ctx.current_schema().items():
        rule = rules.get(keyword)
        if rule is None:
            continue
        actual = json_type(value)
        if actual not in rule.types and not (actual == "integer" and "number" in rule.types):
            expected = ", ".join(sorted(rule.types))
            report.fail(f"{keyword}: value has wrong type {actual} (expected {expected})")
            continue
        if rule.check is not None:
            problem = rule.check(value)
            if problem:
                report.fail(f"{keyword}: {problem}")
    return report


# ---------------------------------------------------------------------------
# Value checks
# ---------------------------------------------------------------------------


def non_negative(value: Any) -> str | None:
    if value < 0:
        return f"value must not be negative (found {value})"
    return None


def strictly_positive(value: Any) -> str | None:
    if value <= 0:
        return f"value must be strictly positive (found {value})"
    return None


def valid_regex(value: str) -> str | None:
    try:
        re.compile(value)
    except re.error as exc:
        return f"invalid regular expression {value!r}: {exc}"
    return None


def schema_map(value: Mapping[str, Any]) -> str | None:
    bad = sorted(name for name, sub in value.items() if not isinstance(sub, Mapping))
    if bad:
        return f"member(s) {bad} are not schemas"
    return None


def pattern_schema_map(value: Mapping[str, Any]) -> str | None:
    for pattern in value:
        problem = valid_regex(pattern)
        if problem:
            return problem
    return schema_map(value)


def schema_array(value: list[Any]) -> str | None:
    if not value:
        return "array must not be empty"
    if not all(isinstance(sub, Mapping) for sub in value):
        return "array elements must be schemas"
    return None


def schema_or_schema_array(value: Any) -> str | None:
    if isinstance(value, Mapping):
        return None
    if not all(isinstance(sub, Mapping) for sub in value):
        return "array elements must be schemas"
    return None


def unique_elements(value: list[Any]) -> str | None:
    for index, element in enumerate(value):
        if any(json_equal(element, other) for other in value[index + 1:]):
            return "array elements must be unique"
    return None


def non_empty_unique(value: list[Any]) -> str | None:
    if not value:
        return "array must not be empty"
    return unique_elements(value)


def v3_type_union(value: Any) -> str | None:
    members = [value] if isinstance(value, str) else value
    for member in members:
        if isinstance(member, str):
            continue
        if not isinstance(member, Mapping):
            return f"type union members must be strings or schemas (found {json_type(member)})"
    return None


def v4_type_names(value: Any) -> str | None:
    members = [value] if isinstance(value, str) else value
    if not members:
        return "array must not be empty"
    if not all(isinstance(member, str) for member in members):
        return "type array elements must be strings"
    unknown = sorted(m for m in members if m not in PRIMITIVE_TYPES)
    if unknown:
        return f"unknown type(s) {unknown}"
    return unique_elements(members)


def string_array(value: list[Any]) -> str | None:
    if not value:
        return "array must not be empty"
    if not all(isinstance(member, str) for member in value):
        return "array elements must be strings"
    return unique_elements(value)


def dependency_map(value: Mapping[str, Any]) -> str | None:
    for name, dependency in value.items():
        if isinstance(dependency, (Mapping, str)):
            continue
        if isinstance(dependency, list) and all(isinstance(d, str) for d in dependency):
            continue
        return f"dependency for {name!r} must be a schema, a string or an array of strings"
    return None


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

COMMON_SYNTAX: Mapping[str, SyntaxRule] = MappingProxyType({
    "$schema": _rule("string"),
    "$ref": _rule("string"),
    "id": _rule("string"),
    "title": _rule("string"),
    "description": _rule("string"),
    "enum": _rule("array", check=non_empty_unique),
    "minimum": _rule("number"),
    "maximum": _rule("number"),
    "exclusiveMinimum": _rule("boolean"),
    "exclusiveMaximum": _rule("boolean"),
    "minLength": _rule("integer", check=non_negative),
    "maxLength": _rule("integer", check=non_negative),
    "pattern": _rule("string", check=valid_regex),
    "format": _rule("string"),
    "properties": _rule("object", check=schema_map),
    "patternProperties": _rule("object", check=pattern_schema_map),
    "additionalProperties": _rule("boolean", "object"),
    "items": _rule("object", "array", check=schema_or_schema_array),
    "additionalItems": _rule("boolean", "object"),
    "minItems": _rule("integer", check=non_negative),
    "maxItems": _rule("integer", check=non_negative),
    "uniqueItems": _rule("boolean"),
    "definitions": _rule("object", check=schema_map),
})

DRAFT3_SYNTAX: Mapping[str, SyntaxRule] = MappingProxyType({
    **COMMON_SYNTAX,
    "type": _rule("string", "array", check=v3_type_union),
    "disallow": _rule("string", "array", check=v3_type_union),
    "extends": _rule("object", "array", check=schema_or_schema_array),
    "divisibleBy": _rule("number", check=strictly_positive),
    "required": _rule("boolean"),
    "dependencies": _rule("object", check=dependency_map),
})

DRAFT4_SYNTAX: Mapping[str, SyntaxRule] = MappingProxyType({
    **COMMON_SYNTAX,
    "type": _rule("string", "array", check=v4_type_names),
    "required": _rule("array", check=string_array),
    "minProperties": _rule("integer", check=non_negative),
    "maxProperties": _rule("integer", check=non_negative),
    "multipleOf": _rule("number", check=strictly_positive),
    "allOf": _rule("array", check=schema_array),
    "anyOf": _rule("array", check=schema_array),
    "oneOf": _rule("array", check=schema_array),
    "not": _rule("object"),
    "dependencies": _rule("object", check=dependency_map),
})
