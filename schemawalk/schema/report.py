"""Validation reports.

A report is scoped to one instance path: every message it records is
prefixed with that path, so messages stay meaningful after they are merged
into a parent report.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationReport(BaseModel):
    """Ordered, path-scoped collection of failure messages.

    Attributes:
        path: Rendered instance pointer, optionally suffixed
            (e.g. ``'#/a [schema]'``).
        messages: Failure messages, oldest first.  Empty means success.
    """

    model_config = ConfigDict(extra="forbid")

    path: str = "#"
    messages: list[str] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.messages

    def fail(self, message: str) -> None:
        """Record ``message`` against this report's path."""
        self.messages.append(f"{self.path}: {message}")

    def merge(self, other: ValidationReport) -> None:
        """Append every message of ``other`` (already path-prefixed)."""
        self.messages.extend(other.messages)

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured summary suitable for API responses."""
        return {
            "path": self.path,
            "valid": self.is_success,
            "messages": list(self.messages),
        }


class ReportFactory:
    """Creates a fresh :class:`ValidationReport` per request.

    Shared by every context of a validation run; holds no per-report state.
    """

    def create(self, path: str) -> ValidationReport:
        return ValidationReport(path=path)
