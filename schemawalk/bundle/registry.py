"""Rule bundle registries (Open/Closed Principle).

``BundleFactory``
    Central, class-level registry of :class:`~schemawalk.bundle.base.RuleBundle`
    classes keyed by :class:`~schemawalk.schema.version.SchemaVersion`.
    Register a bundle class once; every new engine picks it up.

``VersionRegistry``
    Per-engine dispatch table from version to bundle *instance*.  Built once
    and read-only afterwards; each engine owns its bundles, and therefore its
    syntax caches, so no validation state leaks between engines.

Usage::

    from schemawalk.bundle.registry import BundleFactory

    @BundleFactory.register(SchemaVersion.DRAFT_V4)
    class StrictDraftV4Bundle(DraftV4Bundle):
        ...
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from schemawalk.bundle.base import RuleBundle
from schemawalk.errors import SchemaWalkError
from schemawalk.schema.version import DEFAULT_VERSION, SchemaVersion, resolve_version

# ---------------------------------------------------------------------------
# Bundle factory
# ---------------------------------------------------------------------------


class BundleFactory:
    """Registry mapping schema versions to :class:`RuleBundle` classes.

    Example::

        @BundleFactory.register(SchemaVersion.DRAFT_V3)
        class MyDraftV3Bundle(RuleBundle):
            ...

        bundle = BundleFactory.create(SchemaVersion.DRAFT_V3)
    """

    _bundles: ClassVar[dict[SchemaVersion, type[RuleBundle]]] = {}

    @classmethod
    def register(
        cls, version: SchemaVersion
    ) -> Callable[[type[RuleBundle]], type[RuleBundle]]:
        """Decorator that registers a bundle class for ``version``.

        Args:
            version: The dialect the bundle implements.

        Returns:
            A decorator that registers and returns the bundle class.
        """

        def decorator(bundle_cls: type[RuleBundle]) -> type[RuleBundle]:
            cls._bundles[version] = bundle_cls
            return bundle_cls

        return decorator

    @classmethod
    def register_class(cls, version: SchemaVersion, bundle_cls: type[RuleBundle]) -> None:
        """Register a bundle class without using the decorator form."""
        cls._bundles[version] = bundle_cls

    @classmethod
    def create(cls, version: SchemaVersion) -> RuleBundle:
        """Instantiate the bundle registered for ``version``.

        Raises:
            SchemaWalkError: If no bundle is registered for ``version``.
        """
        bundle_cls = cls._bundles.get(version)
        if bundle_cls is None:
            registered = [v.name for v in cls.registered_versions()]
            raise SchemaWalkError(
                f"No rule bundle registered for {version.name}. Registered versions: {registered}."
            )
        return bundle_cls()

    @classmethod
    def registered_versions(cls) -> list[SchemaVersion]:
        """Return the registered versions in declaration order."""
        return [v for v in SchemaVersion if v in cls._bundles]


# ---------------------------------------------------------------------------
# Version registry
# ---------------------------------------------------------------------------


class VersionRegistry:
    """Version detection plus version → bundle dispatch for one engine.

    Args:
        default_version: Dialect for schemas without a recognised ``$schema``.
        bundles: Explicit bundles; by default one fresh bundle per version
            from :class:`BundleFactory`.

    Raises:
        SchemaWalkError: If a version has no bundle.
    """

    def __init__(
        self,
        default_version: SchemaVersion = DEFAULT_VERSION,
        bundles: Mapping[SchemaVersion, RuleBundle] | None = None,
    ) -> None:
        if bundles is None:
            bundles = {version: BundleFactory.create(version) for version in SchemaVersion}
        missing = [v.name for v in SchemaVersion if v not in bundles]
        if missing:
            raise SchemaWalkError(f"No rule bundle supplied for {missing}.")
        self._bundles: Mapping[SchemaVersion, RuleBundle] = MappingProxyType(dict(bundles))
        self._default_version = default_version

    @property
    def default_version(self) -> SchemaVersion:
        return self._default_version

    def resolve_version(self, schema: Any) -> SchemaVersion:
        """See :func:`schemawalk.schema.version.resolve_version`.

        Raises:
            InvalidSchemaError: If ``schema`` is null or not an object.
        """
        return resolve_version(schema, self._default_version)

    def get_bundle(self, version: SchemaVersion) -> RuleBundle:
        return self._bundles[version]
