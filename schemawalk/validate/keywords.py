"""Keyword rules shared by the draft v3 and draft v4 bundles.

Every rule has the signature ``(ctx, instance) -> ValidationReport`` and may
assume the current schema already passed syntax checking.  Rules that descend
into a nested schema never build validators themselves; they ask the context:

* ``ctx.relocate(segment, sub)`` when the instance cursor moves (object
  members, array elements);
* ``ctx.with_schema(sub)`` when it does not (``allOf``, ``extends``, …);
* ``ctx.acquire_validator_at(pointer, instance)`` for ``$ref``.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from schemawalk.errors import InvalidURIError, ResolutionError
from schemawalk.schema.location import split_uri
from schemawalk.schema.pointer import JsonPointer
from schemawalk.schema.report import ValidationReport
from schemawalk.validate.jsontype import (
    is_number,
    json_equal,
    json_type,
    type_matches,
)

if TYPE_CHECKING:
    from schemawalk.schema.context import ValidationContext


def _is_array(instance: Any) -> bool:
    return json_type(instance) == "array"


def _check(ctx: ValidationContext, instance: Any) -> ValidationReport:
    return ctx.acquire_validator(instance).check()


# ---------------------------------------------------------------------------
# References and formats
# ---------------------------------------------------------------------------


def ref(ctx: ValidationContext, instance: Any) -> ValidationReport:
    """Follow ``$ref`` by URI, then by pointer, within the current lineage."""
    try:
        target = ctx.location.resolve_reference(ctx.current_schema()["$ref"])
        pointer = JsonPointer.parse(unquote(split_uri(target).fragment))
        ref_ctx = ctx.follow_uri(target)
    except (InvalidURIError, ResolutionError) as exc:
        report = ctx.report()
        report.fail(str(exc))
        return report
    return ref_ctx.acquire_validator_at(pointer, instance).check()


def format_(ctx: ValidationContext, instance: Any) -> ValidationReport:
    return ctx.acquire_format_validator(ctx.current_schema()["format"], instance).check()


# ---------------------------------------------------------------------------
# Types and values
# ---------------------------------------------------------------------------


def _as_list(value: Any) -> list[Any]:
    return [value] if isinstance(value, (str, Mapping)) else list(value)


def _matches_v3(ctx: ValidationContext, member: Any, instance: Any) -> bool:
    if isinstance(member, Mapping):
        return _check(ctx.with_schema(member), instance).is_success
    return member == "any" or type_matches(member, instance)


def type_v3(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    members = _as_list(ctx.current_schema()["type"])
    if not any(_matches_v3(ctx, member, instance) for member in members):
        allowed = sorted(m for m in members if isinstance(m, str))
        report.fail(
            f"instance is of type {json_type(instance)}, which is none of the allowed types {allowed}"
        )
    return report


def disallow(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    members = _as_list(ctx.current_schema()["disallow"])
    if any(_matches_v3(ctx, member, instance) for member in members):
        report.fail(f"instance is of disallowed type {json_type(instance)}")
    return report


def type_v4(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    members = _as_list(ctx.current_schema()["type"])
    if not any(type_matches(member, instance) for member in members):
        report.fail(
            f"instance is of type {json_type(instance)}, which is none of the allowed types {sorted(members)}"
        )
    return report


def enum(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not any(json_equal(instance, value) for value in ctx.current_schema()["enum"]):
        report.fail("instance does not match any enum value")
    return report


def minimum(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not is_number(instance):
        return report
    schema = ctx.current_schema()
    bound = schema["minimum"]
    if schema.get("exclusiveMinimum", False):
        if instance <= bound:
            report.fail(f"number is not strictly greater than {bound}")
    elif instance < bound:
        report.fail(f"number is lower than the required minimum {bound}")
    return report


def maximum(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not is_number(instance):
        return report
    schema = ctx.current_schema()
    bound = schema["maximum"]
    if schema.get("exclusiveMaximum", False):
        if instance >= bound:
            report.fail(f"number is not strictly lower than {bound}")
    elif instance > bound:
        report.fail(f"number is greater than the required maximum {bound}")
    return report


def _is_multiple(value: Any, divisor: Any) -> bool:
    """Exact check in decimal arithmetic, so ``0.3`` is a multiple of ``0.1``.

    Precision covers every digit of ``value`` down to the finer of the two
    exponents, so the integer quotient always fits.
    """
    dividend, step = Decimal(str(value)), Decimal(str(divisor))
    if not (dividend.is_finite() and step.is_finite()):
        return False
    finest = min(dividend.as_tuple().exponent, step.as_tuple().exponent)
    with localcontext() as decimal_ctx:
        decimal_ctx.prec = max(decimal_ctx.prec, dividend.adjusted() - finest + 2)
        return dividend % step == 0


def _divisible(keyword: str):
    def rule(ctx: ValidationContext, instance: Any) -> ValidationReport:
        report = ctx.report()
        if not is_number(instance):
            return report
        divisor = ctx.current_schema()[keyword]
        if not _is_multiple(instance, divisor):
            report.fail(f"number is not a multiple of {divisor}")
        return report

    rule.__name__ = keyword
    return rule


divisible_by = _divisible("divisibleBy")
multiple_of = _divisible("multipleOf")


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def min_length(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["minLength"]
    if isinstance(instance, str) and len(instance) < bound:
        report.fail(f"string is shorter than {bound} character(s)")
    return report


def max_length(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["maxLength"]
    if isinstance(instance, str) and len(instance) > bound:
        report.fail(f"string is longer than {bound} character(s)")
    return report


def pattern(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    regex = ctx.current_schema()["pattern"]
    if isinstance(instance, str) and re.search(regex, instance) is None:
        report.fail(f"string does not match pattern {regex!r}")
    return report


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


def properties(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not isinstance(instance, Mapping):
        return report
    for name, sub in ctx.current_schema()["properties"].items():
        if name in instance:
            report.merge(_check(ctx.relocate(name, sub), instance[name]))
    return report


def properties_v3(ctx: ValidationContext, instance: Any) -> ValidationReport:
    """Draft v3 ``properties``: also enforces member-level ``required``."""
    report = properties(ctx, instance)
    if not isinstance(instance, Mapping):
        return report
    for name, sub in ctx.current_schema()["properties"].items():
        if name not in instance and sub.get("required") is True:
            report.fail(f"required property {name!r} is missing")
    return report


def required_v4(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not isinstance(instance, Mapping):
        return report
    missing = [name for name in ctx.current_schema()["required"] if name not in instance]
    if missing:
        report.fail(f"required property(ies) missing: {missing}")
    return report


def pattern_properties(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not isinstance(instance, Mapping):
        return report
    for regex, sub in ctx.current_schema()["patternProperties"].items():
        for name, value in instance.items():
            if re.search(regex, name):
                report.merge(_check(ctx.relocate(name, sub), value))
    return report


def additional_properties(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    schema = ctx.current_schema()
    additional = schema["additionalProperties"]
    if additional is True or not isinstance(instance, Mapping):
        return report

    declared = schema.get("properties", {})
    regexes = list(schema.get("patternProperties", {}))
    extras = [
        name
        for name in instance
        if name not in declared and not any(re.search(r, name) for r in regexes)
    ]
    if additional is False:
        if extras:
            report.fail(f"additional properties not permitted: {sorted(extras)}")
        return report

    for name in extras:
        report.merge(_check(ctx.relocate(name, additional), instance[name]))
    return report


def dependencies(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not isinstance(instance, Mapping):
        return report
    for name, dependency in ctx.current_schema()["dependencies"].items():
        if name not in instance:
            continue
        if isinstance(dependency, Mapping):
            report.merge(_check(ctx.with_schema(dependency), instance))
            continue
        missing = [d for d in _as_list(dependency) if d not in instance]
        if missing:
            report.fail(f"property {name!r} requires missing property(ies) {missing}")
    return report


def min_properties(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["minProperties"]
    if isinstance(instance, Mapping) and len(instance) < bound:
        report.fail(f"object has fewer than {bound} member(s)")
    return report


def max_properties(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["maxProperties"]
    if isinstance(instance, Mapping) and len(instance) > bound:
        report.fail(f"object has more than {bound} member(s)")
    return report


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def items(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if not _is_array(instance):
        return report
    items_schema = ctx.current_schema()["items"]
    if isinstance(items_schema, Mapping):
        for index, element in enumerate(instance):
            report.merge(_check(ctx.relocate(str(index), items_schema), element))
    else:
        for index, (sub, element) in enumerate(zip(items_schema, instance)):
            report.merge(_check(ctx.relocate(str(index), sub), element))
    return report


def additional_items(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    schema = ctx.current_schema()
    tuple_items = schema.get("items")
    additional = schema["additionalItems"]
    if (
        additional is True
        or not _is_array(instance)
        or not isinstance(tuple_items, Sequence)
        or isinstance(tuple_items, (str, Mapping))
    ):
        return report

    extra = instance[len(tuple_items):]
    if additional is False:
        if extra:
            report.fail(f"array has more than the {len(tuple_items)} element(s) allowed")
        return report

    for offset, element in enumerate(extra, start=len(tuple_items)):
        report.merge(_check(ctx.relocate(str(offset), additional), element))
    return report


def min_items(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["minItems"]
    if _is_array(instance) and len(instance) < bound:
        report.fail(f"array has fewer than {bound} element(s)")
    return report


def max_items(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    bound = ctx.current_schema()["maxItems"]
    if _is_array(instance) and len(instance) > bound:
        report.fail(f"array has more than {bound} element(s)")
    return report


def unique_items(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if ctx.current_schema()["uniqueItems"] is not True or not _is_array(instance):
        return report
    for index, element in enumerate(instance):
        if any(json_equal(element, other) for other in instance[index + 1:]):
            report.fail("array elements are not unique")
            break
    return report


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def all_of(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    for sub in ctx.current_schema()["allOf"]:
        report.merge(_check(ctx.with_schema(sub), instance))
    return report


def extends(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    for sub in _as_list(ctx.current_schema()["extends"]):
        report.merge(_check(ctx.with_schema(sub), instance))
    return report


def any_of(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    reports = [_check(ctx.with_schema(sub), instance) for sub in ctx.current_schema()["anyOf"]]
    if not any(r.is_success for r in reports):
        report.fail("instance matched none of the anyOf schemas")
        for sub_report in reports:
            report.merge(sub_report)
    return report


def one_of(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    reports = [_check(ctx.with_schema(sub), instance) for sub in ctx.current_schema()["oneOf"]]
    matched = sum(1 for r in reports if r.is_success)
    if matched == 0:
        report.fail("instance matched none of the oneOf schemas")
        for sub_report in reports:
            report.merge(sub_report)
    elif matched > 1:
        report.fail(f"instance matched {matched} of the oneOf schemas, expected exactly one")
    return report


def not_(ctx: ValidationContext, instance: Any) -> ValidationReport:
    report = ctx.report()
    if _check(ctx.with_schema(ctx.current_schema()["not"]), instance).is_success:
        report.fail("instance matched a schema it must not match")
    return report
