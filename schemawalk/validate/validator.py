"""Validator capability and its concrete variants.

A validator is bound to a context and an instance at construction time and
produces a :class:`~schemawalk.schema.report.ValidationReport` on
:meth:`Validator.check`.

Variants
--------
AlwaysFalseValidator
    Carries a pre-built failing report.  Used to short-circuit on a broken
    sub-schema, an unresolvable pointer, or a ``$ref`` loop.
AlwaysTrueValidator
    Succeeds unconditionally (unknown formats).
InstanceValidator
    Runs a rule bundle's keyword rules over the current schema node.
FormatValidator
    Applies one format predicate to a string instance.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from schemawalk.schema.report import ValidationReport

if TYPE_CHECKING:
    from schemawalk.schema.context import ValidationContext
    from schemawalk.validate.formats import FormatRule

#: ``(context, instance) -> report`` for one schema keyword.
KeywordRule = Callable[["ValidationContext", Any], ValidationReport]


class Validator(ABC):
    """Checks one instance against the schema of one context."""

    @abstractmethod
    def check(self) -> ValidationReport:
        """Run the check and return its report."""


class AlwaysFalseValidator(Validator):
    """Returns the report it was built with.

    Args:
        report: A failing report explaining why validation cannot proceed.
    """

    def __init__(self, report: ValidationReport) -> None:
        self._report = report

    def check(self) -> ValidationReport:
        return self._report


class AlwaysTrueValidator(Validator):
    def __init__(self, ctx: ValidationContext) -> None:
        self._ctx = ctx

    def check(self) -> ValidationReport:
        return self._ctx.report()


class InstanceValidator(Validator):
    """Applies every known keyword of the current schema to ``instance``.

    ``$ref`` takes precedence: when present (and known to the bundle) its
    siblings are ignored, as both supported drafts require.

    Args:
        ctx: Context whose current schema is applied.
        instance: The instance node.
        rules: Keyword name to rule, supplied by the rule bundle.
    """

    def __init__(
        self,
        ctx: ValidationContext,
        instance: Any,
        rules: Mapping[str, KeywordRule],
    ) -> None:
        self._ctx = ctx
        self._instance = instance
        self._rules = rules

    def check(self) -> ValidationReport:
        report = self._ctx.report()
        schema = self._ctx.current_schema()

        ref_rule = self._rules.get("$ref")
        if ref_rule is not None and "$ref" in schema:
            report.merge(ref_rule(self._ctx, self._instance))
            return report

        for keyword in schema:
            rule = self._rules.get(keyword)
            if rule is not None:
                report.merge(rule(self._ctx, self._instance))
        return report


class FormatValidator(Validator):
    """Checks a string instance against one format; other types pass.

    Args:
        ctx: Context the report is scoped to.
        instance: The instance node.
        rule: The format predicate and its failure message.
    """

    def __init__(self, ctx: ValidationContext, instance: Any, rule: FormatRule) -> None:
        self._ctx = ctx
        self._instance = instance
        self._rule = rule

    def check(self) -> ValidationReport:
        report = self._ctx.report()
        if isinstance(self._instance, str) and not self._rule.predicate(self._instance):
            report.fail(self._rule.message)
        return report
