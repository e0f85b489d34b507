"""Validation context.

A :class:`ValidationContext` accompanies every recursive validation step.  It
bundles the instance pointer, the schema location, version dispatch, the
report factory and the ``$ref`` lineage into one immutable value, and it is
the only way a keyword rule obtains a validator for a nested instance.

Spawning
--------
Every transition returns a *new* context; none modifies the receiver:

``relocate(segment, sub)``
    The instance cursor moves (object member, array element).  Starts a new
    ``$ref`` lineage seeded with ``sub``: recursion that consumes the instance
    is bounded by the instance itself.
``with_schema(sub)``
    Same instance position, different schema (``allOf``, ``extends``, …).
    The lineage is carried forward.
``follow_uri(uri)``
    Redirect to another document; same instance position, lineage carried.
``acquire_validator_at(pointer, instance)``
    Follow a ``$ref`` pointer.  The target node joins the lineage of the
    spawned child; meeting it again in that lineage is a loop.

Lineages are ``frozenset`` values, so siblings spawned from one parent share
the parent's set and grow independently.

Failure channels
----------------
Only :meth:`ValidationContext.root` raises for an unusable schema.  Every
later problem (broken nested schema, unresolvable pointer, ``$ref`` loop)
becomes a report carried by an
:class:`~schemawalk.validate.validator.AlwaysFalseValidator`.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from schemawalk.errors import InvalidSchemaError
from schemawalk.schema.location import MISSING, SchemaLocation
from schemawalk.schema.pointer import JsonPointer
from schemawalk.schema.report import ReportFactory, ValidationReport
from schemawalk.validate.syntax import SCHEMA_REPORT_SUFFIX
from schemawalk.validate.validator import AlwaysFalseValidator, Validator

if TYPE_CHECKING:
    from schemawalk.bundle.base import RuleBundle
    from schemawalk.bundle.registry import VersionRegistry

logger = logging.getLogger(__name__)


def _identity(node: Any) -> int:
    return id(node)


@dataclass(frozen=True)
class ValidationContext:
    """Immutable context for one step of a validation run.

    Attributes:
        location: Position within the schema.
        registry: Version detection and version → bundle dispatch (shared).
        reports: Report factory (shared).
        path: Position within the instance.
        lineage: Identities of the schema nodes visited along the current
            ``$ref`` resolution lineage.
    """

    location: SchemaLocation
    registry: VersionRegistry = field(repr=False, compare=False)
    reports: ReportFactory = field(repr=False, compare=False)
    path: JsonPointer = field(default_factory=JsonPointer)
    lineage: frozenset[int] = frozenset()

    @classmethod
    def root(
        cls,
        location: SchemaLocation,
        registry: VersionRegistry,
        reports: ReportFactory | None = None,
    ) -> ValidationContext:
        """Create the context of a top-level validation run.

        Raises:
            InvalidSchemaError: If the root schema is null or not an object.
        """
        schema = location.current_node()
        registry.resolve_version(schema)
        return cls(
            location=location,
            registry=registry,
            reports=reports if reports is not None else ReportFactory(),
            lineage=frozenset({_identity(schema)}),
        )

    def current_schema(self) -> Any:
        """The schema node of this context (not the root schema)."""
        return self.location.current_node()

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def relocate(self, segment: str | None, sub_schema: Any) -> ValidationContext:
        """Spawn a child at ``segment`` within the instance.

        The child's lineage is *not* copied from this context: it restarts
        with ``sub_schema`` alone.  A schema that recurses through the
        instance (``{"items": {"$ref": "#"}}``) revisits the same nodes at
        every level; a copied lineage would report each revisit as a loop.
        Termination is still guaranteed since every relocation consumes one
        level of the finite instance.

        Args:
            segment: Instance path segment; ``None`` keeps the current path
                (the empty string is a valid segment).
            sub_schema: Schema node for the child.
        """
        return replace(
            self,
            path=self.path.append(segment),
            location=self.location.with_node(sub_schema),
            lineage=frozenset({_identity(sub_schema)}),
        )

    def with_schema(self, sub_schema: Any) -> ValidationContext:
        return replace(self, location=self.location.with_node(sub_schema))

    def follow_uri(self, uri: str) -> ValidationContext:
        """Spawn a child whose schema location is the document at ``uri``.

        A bare fragment returns this context: the pointer part is resolved
        separately by :meth:`acquire_validator_at`.

        Raises:
            InvalidURIError: If ``uri`` is neither absolute nor a bare fragment.
            ResolutionError: If the document cannot be fetched.
        """
        location = self.location.at_uri(uri)
        if location is self.location:
            return self
        return replace(self, location=location)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    def ensure_schema_valid(self) -> ValidationReport:
        """Check the syntax of the current schema.

        Never raises: a null or non-object schema yields a failing report
        scoped to ``<path> [schema]``.
        """
        schema = self.current_schema()
        try:
            bundle = self._bundle()
        except InvalidSchemaError as exc:
            report = self.report(SCHEMA_REPORT_SUFFIX)
            report.fail(str(exc))
            return report

        if bundle.is_syntax_validated(schema):
            return self.report()
        return bundle.check_syntax(self)

    def acquire_validator(self, instance: Any) -> Validator:
        """Return a validator of ``instance`` against the current schema.

        This is what keyword rules must call for nested instances, since it
        handles schema syntax checking.
        """
        report = self.ensure_schema_valid()
        if not report.is_success:
            return AlwaysFalseValidator(report)
        return self._bundle().build_instance_validator(self, instance)

    def acquire_format_validator(self, format_name: str, instance: Any) -> Validator:
        return self._bundle().build_format_validator(self, format_name, instance)

    def acquire_validator_at(self, pointer: JsonPointer, instance: Any) -> Validator:
        """Return a validator for the schema at ``pointer``.

        ``pointer`` is resolved from the root of the current document, not
        from the current node.  The node found there joins the lineage of a
        spawned child context; this context is left untouched.
        """
        logger.debug("looking up %s in %s", pointer, self.location.base_uri or "root schema")
        location = self.location.at_pointer(pointer)
        node = location.current_node()

        if node is MISSING:
            report = self.report()
            report.fail(f"no match in schema for path {pointer}")
            return AlwaysFalseValidator(report)

        if isinstance(node, Mapping) and _identity(node) in self.lineage:
            logger.debug("ref loop detected at %s after %d node(s)", pointer, len(self.lineage))
            report = self.report()
            report.fail(f"schema {json.dumps(node, default=str)} loops on itself")
            return AlwaysFalseValidator(report)

        child = replace(self, location=location, lineage=self.lineage | {_identity(node)})
        return child.acquire_validator(instance)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def report(self, prefix: str = "") -> ValidationReport:
        """Create a report scoped to this context's instance path."""
        return self.reports.create(self.path.render() + prefix)

    def _bundle(self) -> RuleBundle:
        version = self.registry.resolve_version(self.current_schema())
        return self.registry.get_bundle(version)
