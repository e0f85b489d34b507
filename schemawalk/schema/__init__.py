"""schemawalk schema-side value types: pointers, locations, versions, reports."""
from schemawalk.schema.config import EngineConfig
from schemawalk.schema.location import MISSING, SchemaLocation
from schemawalk.schema.pointer import JsonPointer
from schemawalk.schema.report import ReportFactory, ValidationReport
from schemawalk.schema.version import DEFAULT_VERSION, SchemaVersion, resolve_version

__all__ = [
    "EngineConfig",
    "MISSING",
    "SchemaLocation",
    "JsonPointer",
    "ReportFactory",
    "ValidationReport",
    "DEFAULT_VERSION",
    "SchemaVersion",
    "resolve_version",
]
