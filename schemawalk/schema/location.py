"""Schema location ("schema provider").

A :class:`SchemaLocation` pins exactly one *current node* inside exactly one
*root document*.  It never mutates: replacing the node, following a pointer,
or redirecting to another document all return a new location.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import SplitResult, urldefrag, urljoin, urlsplit

from schemawalk.errors import InvalidURIError
from schemawalk.resolve.resolver import DocumentResolver
from schemawalk.schema.pointer import MISSING, JsonPointer

__all__ = ["MISSING", "SchemaLocation", "split_uri"]


@dataclass(frozen=True)
class SchemaLocation:
    """The schema node currently in scope.

    Attributes:
        root: Root of the document the node belongs to.
        node: The current node, or :data:`MISSING`.
        resolver: Fetches documents for absolute URIs.
        base_uri: Fragment-less URI of ``root`` (empty when unknown).
    """

    root: Any
    node: Any
    resolver: DocumentResolver = field(repr=False, compare=False)
    base_uri: str = ""

    @classmethod
    def for_document(
        cls,
        document: Any,
        resolver: DocumentResolver | None = None,
        base_uri: str = "",
    ) -> SchemaLocation:
        """Create a location at the root of ``document``.

        Raises:
            InvalidURIError: If ``base_uri`` is malformed.
        """
        split_uri(base_uri)
        return cls(
            root=document,
            node=document,
            resolver=resolver if resolver is not None else DocumentResolver(),
            base_uri=urldefrag(base_uri)[0],
        )

    def current_node(self) -> Any:
        return self.node

    def with_node(self, node: Any) -> SchemaLocation:
        """Same root document and URI, different current node."""
        return replace(self, node=node)

    def at_pointer(self, pointer: JsonPointer) -> SchemaLocation:
        """Resolve ``pointer`` against the root document.

        The resulting node is :data:`MISSING` when resolution fails.
        """
        return replace(self, node=pointer.resolve(self.root))
    def at_uri(self, uri: str) -> SchemaLocation:
        """Redirect to the document at ``uri``.

        A bare fragment (``#/definitions/a``, ``#`` or the empty string) does
        not leave the current document and returns this location unchanged;
        the pointer part is the caller's business.

        Raises:
            InvalidURIError: If ``uri`` is malformed, or neither absolute nor
                a bare fragment.
            ResolutionError: If the document cannot be fetched.
        """
        parts = split_uri(uri)
        if not parts.scheme:
            if parts.netloc or parts.path or parts.query:
                raise InvalidURIError(
                    f"invalid URI {uri!r}: URI is not absolute and is not a JSON Pointer either",
                    uri=uri,
                )
            return self

        document = self.resolver.fetch(uri)
        return SchemaLocation(
            root=document,
            node=document,
            resolver=self.resolver,
            base_uri=urldefrag(uri)[0],
        )

    def resolve_reference(self, ref: str) -> str:
        """Make a relative ``$ref`` absolute against :attr:`base_uri`.

        Bare fragments and references without a known base are returned
        as-is.

        Raises:
            InvalidURIError: If ``ref`` cannot be parsed as a URI reference.
        """
        if ref.startswith("#") or not self.base_uri or split_uri(ref).scheme:
            return ref
        try:
            return urljoin(self.base_uri, ref)
        except ValueError as exc:
            raise InvalidURIError(f"invalid URI {ref!r}: {exc}", uri=ref) from exc


def split_uri(uri: str) -> SplitResult:
    """``urlsplit`` that reports malformed URIs as :class:`InvalidURIError`."""
    try:
        return urlsplit(uri)
    except ValueError as exc:
        raise InvalidURIError(f"invalid URI {uri!r}: {exc}", uri=uri) from exc
