"""JSON Schema dialect detection.

A schema declares its dialect through the ``$schema`` keyword.  Detection is
lenient about *which* dialect (anything unrecognised falls back
to the default) but strict about the node being a schema at all.
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from schemawalk.errors import InvalidSchemaError


class SchemaVersion(str, Enum):
    """Supported schema dialects, keyed by their locator URI."""

    DRAFT_V3 = "http://json-schema.org/draft-03/schema#"
    DRAFT_V4 = "http://json-schema.org/draft-04/schema#"

    @property
    def locator(self) -> str:
        return self.value


#: Dialect used when a schema does not declare a recognised ``$schema``.
DEFAULT_VERSION = SchemaVersion.DRAFT_V3

_LOCATORS: Mapping[str, SchemaVersion] = MappingProxyType(
    {version.locator: version for version in SchemaVersion}
)


def resolve_version(schema: Any, default: SchemaVersion = DEFAULT_VERSION) -> SchemaVersion:
    """Detect the dialect of ``schema``.

    Args:
        schema: A schema node.
        default: Returned when ``$schema`` is absent or unrecognised.

    Returns:
        The matching :class:`SchemaVersion`, or ``default``.

    Raises:
        InvalidSchemaError: If ``schema`` is ``None`` or not a JSON object.
    """
    if schema is None:
        raise InvalidSchemaError("schema is null")
    if not isinstance(schema, Mapping):
        raise InvalidSchemaError("not a schema (not an object)", schema=schema)

    locator = schema.get("$schema")
    if not isinstance(locator, str):
        return default
    return _LOCATORS.get(locator, default)
