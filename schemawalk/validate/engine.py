"""Top-level validation engine.

``SchemaValidator`` owns everything that is shared across runs: the version
registry (and with it each bundle's syntax cache), the document resolver and
the report factory.  Each call to :meth:`SchemaValidator.validate` creates a
root :class:`~schemawalk.schema.context.ValidationContext` and lets the
context machinery do the rest.

An engine may be shared between threads: the syntax caches and the resolver
store are insert-or-get under a lock.
"""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import unquote

from schemawalk.bundle.registry import VersionRegistry
from schemawalk.resolve.resolver import DocumentResolver
from schemawalk.schema.config import EngineConfig
from schemawalk.schema.context import ValidationContext
from schemawalk.schema.location import SchemaLocation, split_uri
from schemawalk.schema.pointer import JsonPointer
from schemawalk.schema.report import ReportFactory, ValidationReport

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Validates JSON instances against JSON Schema documents.

    Args:
        config: Engine configuration; defaults to ``EngineConfig()``.
        registry: Optional pre-built version registry (custom bundles).
        resolver: Optional pre-built document resolver (custom handlers).
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        registry: VersionRegistry | None = None,
        resolver: DocumentResolver | None = None,
    ) -> None:
        self._config = config if config is not None else EngineConfig()
        self._registry = registry or VersionRegistry(self._config.default_version)
        self._resolver = resolver or DocumentResolver(
            self._config.store,
            fetch_remote=self._config.fetch_remote,
            http_timeout=self._config.http_timeout,
        )
        self._reports = ReportFactory()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def registry(self) -> VersionRegistry:
        return self._registry

    @property
    def resolver(self) -> DocumentResolver:
        return self._resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def context_for(self, schema: Any, base_uri: str = "") -> ValidationContext:
        """Create the root context for ``schema``.

        Args:
            schema: The root schema document.
            base_uri: Absolute URI of ``schema``, used to resolve relative
                references.  The schema is also stored under it, replacing
                any document registered there earlier, so that absolute
                references back to ``base_uri`` land in this schema.  A run
                already in progress on a shared engine keeps the nodes it
                has fetched; runs started afterwards see the new schema.

        Raises:
            InvalidSchemaError: If ``schema`` is null or not an object.
        """
        location = SchemaLocation.for_document(schema, self._resolver, base_uri)
        ctx = ValidationContext.root(location, self._registry, self._reports)
        if location.base_uri:
            self._resolver.add(location.base_uri, schema)
        return ctx

    def validate(self, instance: Any, schema: Any, base_uri: str = "") -> ValidationReport:
        """Validate ``instance`` against ``schema``.

        Returns:
            The report; never raises for an invalid instance or a broken
            sub-schema.

        Raises:
            InvalidSchemaError: If ``schema`` itself is null or not an object.
        """
        ctx = self.context_for(schema, base_uri)
        report = ctx.acquire_validator(instance).check()
        logger.debug("validation finished with %d message(s)", len(report.messages))
        return report

    def validate_uri(self, instance: Any, uri: str) -> ValidationReport:
        """Validate ``instance`` against the schema at an absolute ``uri``.

        A fragment selects a sub-schema, e.g.
        ``http://example.com/defs.json#/definitions/address``.

        Raises:
            InvalidURIError: If ``uri`` is malformed.
            ResolutionError: If the document cannot be fetched.
            InvalidSchemaError: If the document is null or not an object.
            InvalidPointerError: If the fragment is not a JSON Pointer.
        """
        fragment = split_uri(uri).fragment
        document = self._resolver.fetch(uri)
        ctx = self.context_for(document, base_uri=uri)
        if not fragment:
            return ctx.acquire_validator(instance).check()
        pointer = JsonPointer.parse(unquote(fragment))
        return ctx.acquire_validator_at(pointer, instance).check()

    def check_schema(self, schema: Any) -> ValidationReport:
        """Check the syntax of the root node of ``schema`` only.

        Raises:
            InvalidSchemaError: If ``schema`` is null or not an object.
        """
        return self.context_for(schema).ensure_schema_valid()
