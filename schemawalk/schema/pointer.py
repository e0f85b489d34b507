"""JSON Pointer value type.

A :class:`JsonPointer` is an immutable sequence of reference tokens.  It is
used on both sides of a validation run: as the cursor into the *instance*
(carried by every :class:`~schemawalk.schema.context.ValidationContext`) and
as the target of a ``$ref`` fragment into the *schema*.

Escaping and parsing of the RFC 6901 string form is delegated to the
``jsonpointer`` library; resolution against a document is done here so that
only JSON mappings and arrays are ever indexed (``jsonpointer`` would happily
index into a string).
"""
from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import jsonpointer

from schemawalk.errors import InvalidPointerError

_ARRAY_INDEX = re.compile(r"^(0|[1-9][0-9]*)$")


class _Missing:
    """Sentinel for "nothing at this location"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


#: Returned by every lookup that fails to resolve.  Compare with ``is``.
MISSING: Any = _Missing()


@dataclass(frozen=True)
class JsonPointer:
    """Immutable path within a JSON document.

    The empty pointer denotes the document root.  An empty-string segment is
    a valid token and is distinct from "no segment".

    Attributes:
        segments: Unescaped reference tokens, root first.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> JsonPointer:
        """Parse ``""``, ``"#"``, ``"/a/b"`` or ``"#/a/b"`` into a pointer.

        The input must already be percent-decoded when it comes from a URI
        fragment.

        Raises:
            InvalidPointerError: If ``text`` is not a valid JSON Pointer.
        """
        if text.startswith("#"):
            text = text[1:]
        if not text:
            return cls()
        try:
            parts = jsonpointer.JsonPointer(text).parts
        except jsonpointer.JsonPointerException as exc:
            raise InvalidPointerError(f"invalid JSON Pointer: {text!r}", uri=text) from exc
        return cls(tuple(parts))

    def append(self, segment: str | None) -> JsonPointer:
        """Return a new pointer with ``segment`` appended.

        ``None`` means "no segment" and returns this pointer unchanged.
        """
        if segment is None:
            return self
        return JsonPointer(self.segments + (str(segment),))

    def render(self) -> str:
        """Render as a URI fragment, e.g. ``#/properties/a~1b``."""
        return "#" + jsonpointer.JsonPointer.from_parts(self.segments).path

    def resolve(self, document: Any) -> Any:
        """Walk ``document`` along this pointer.

        Returns:
            The referenced node, or :data:`MISSING` if any step fails.
        """
        node = document
        for segment in self.segments:
            if isinstance(node, Mapping):
                if segment not in node:
                    return MISSING
                node = node[segment]
            elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
                if not _ARRAY_INDEX.match(segment):
                    return MISSING
                index = int(segment)
                if index >= len(node):
                    return MISSING
                node = node[index]
            else:
                return MISSING
        return node

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return self.render()
