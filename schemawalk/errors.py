"""Custom exception hierarchy for schemawalk.

All public errors inherit from SchemaWalkError so callers can catch the base
class for any schemawalk-specific failure.

Only *hard* failures are raised: an unusable root schema, a malformed
reference URI, or a document that cannot be fetched.  Everything else is
reported through :class:`~schemawalk.schema.report.ValidationReport`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from schemawalk.schema.report import ValidationReport


class SchemaWalkError(Exception):
    """Base exception for all schemawalk errors."""


class InvalidSchemaError(SchemaWalkError):
    """Raised when a schema node is null or is not a JSON object.

    Args:
        message: Human-readable description.
        schema: The offending node.
    """

    def __init__(self, message: str, schema: Any = None) -> None:
        super().__init__(message)
        self.schema = schema


class InvalidURIError(SchemaWalkError, ValueError):
    """Raised when a reference is neither absolute nor a bare JSON Pointer.

    Args:
        message: Human-readable description.
        uri: The rejected reference.
    """

    def __init__(self, message: str, uri: str | None = None) -> None:
        super().__init__(message)
        self.uri = uri


class InvalidPointerError(InvalidURIError):
    """Raised when a fragment cannot be parsed as a JSON Pointer."""


class ResolutionError(SchemaWalkError):
    """Raised when the document at an absolute URI cannot be fetched.

    Args:
        message: Human-readable description.
        uri: The URI that failed to resolve.
    """

    def __init__(self, message: str, uri: str) -> None:
        super().__init__(message)
        self.uri = uri


class InstanceValidationError(SchemaWalkError):
    """Raised by :func:`schemawalk.validate_or_raise` for a failing instance.

    Args:
        report: The failing validation report.
    """

    def __init__(self, report: ValidationReport) -> None:
        super().__init__(
            f"instance does not match schema ({len(report.messages)} error(s))"
        )
        self.report = report

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response for API callers."""
        return {
            "error": "INSTANCE_INVALID",
            "message": str(self),
            "details": self.report.to_error_response(),
        }
