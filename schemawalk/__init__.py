"""schemawalk – JSON Schema validation with safe ``$ref`` resolution.

Follow References. Never Loop.

Public API
----------
``validate``
    Validate an instance against a schema and return a ``ValidationReport``.

``validate_or_raise``
    Same, but raise ``InstanceValidationError`` when the instance fails.

``SchemaValidator``
    Reusable engine: shares syntax caches and fetched documents across runs.

Re-exported types
-----------------
``ValidationContext``, ``ValidationReport``, ``JsonPointer``,
``SchemaLocation``, ``SchemaVersion``, ``EngineConfig``, the rule bundles,
and all error classes.

Extensibility
-------------
Replacement rule bundles can be registered via::

    from schemawalk.bundle.registry import BundleFactory

    @BundleFactory.register(SchemaVersion.DRAFT_V4)
    class StrictDraftV4Bundle(DraftV4Bundle):
        ...

Engines created after registration pick it up automatically.
"""

from __future__ import annotations

from typing import Any

from schemawalk.bundle.base import RuleBundle, SyntaxCache
from schemawalk.bundle.draft3 import DraftV3Bundle
from schemawalk.bundle.draft4 import DraftV4Bundle
from schemawalk.bundle.registry import BundleFactory, VersionRegistry
from schemawalk.errors import (
    InstanceValidationError,
    InvalidPointerError,
    InvalidSchemaError,
    InvalidURIError,
    ResolutionError,
    SchemaWalkError,
)
from schemawalk.resolve.resolver import DocumentResolver
from schemawalk.schema.config import EngineConfig
from schemawalk.schema.context import ValidationContext
from schemawalk.schema.location import MISSING, SchemaLocation
from schemawalk.schema.pointer import JsonPointer
from schemawalk.schema.report import ReportFactory, ValidationReport
from schemawalk.schema.version import DEFAULT_VERSION, SchemaVersion
from schemawalk.validate.engine import SchemaValidator
from schemawalk.validate.validator import AlwaysFalseValidator, Validator

# ---------------------------------------------------------------------------
# Register built-in rule bundles with BundleFactory
# ---------------------------------------------------------------------------

BundleFactory.register_class(SchemaVersion.DRAFT_V3, DraftV3Bundle)
BundleFactory.register_class(SchemaVersion.DRAFT_V4, DraftV4Bundle)

__all__ = [
    # Core pipeline
    "validate",
    "validate_or_raise",
    "SchemaValidator",
    "EngineConfig",
    # Context machinery
    "ValidationContext",
    "SchemaLocation",
    "MISSING",
    "JsonPointer",
    "SchemaVersion",
    "DEFAULT_VERSION",
    "DocumentResolver",
    # Reports and validators
    "ValidationReport",
    "ReportFactory",
    "Validator",
    "AlwaysFalseValidator",
    # Bundles
    "RuleBundle",
    "SyntaxCache",
    "DraftV3Bundle",
    "DraftV4Bundle",
    "BundleFactory",
    "VersionRegistry",
    # Errors
    "SchemaWalkError",
    "InvalidSchemaError",
    "InvalidURIError",
    "InvalidPointerError",
    "ResolutionError",
    "InstanceValidationError",
]


def validate(
    instance: Any,
    schema: Any,
    config: EngineConfig | None = None,
) -> ValidationReport:
    """Validate ``instance`` against ``schema`` with a one-off engine.

    This is the main entry point for single validations::

        report = schemawalk.validate({"name": "x"}, schema)
        if not report.is_success:
            for message in report.messages:
                print(message)

    Args:
        instance: The JSON instance (Python-native tree).
        schema: The root schema document.
        config: Optional engine configuration; defaults to ``EngineConfig()``.

    Returns:
        ``ValidationReport`` with one path-prefixed message per failure.

    Raises:
        InvalidSchemaError: If the root schema is null or not an object.
    """
    return SchemaValidator(config).validate(instance, schema)


def validate_or_raise(
    instance: Any,
    schema: Any,
    config: EngineConfig | None = None,
) -> None:
    """Validate ``instance`` and raise if it does not match ``schema``.

    Raises:
        InstanceValidationError: If the report has any message.
        InvalidSchemaError: If the root schema is null or not an object.
    """
    report = validate(instance, schema, config)
    if not report.is_success:
        raise InstanceValidationError(report)
