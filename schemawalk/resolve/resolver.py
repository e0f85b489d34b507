"""Document resolution for absolute ``$ref`` URIs.

``DocumentResolver`` maps an absolute URI to a decoded JSON document.  It
consults an in-memory store first, then a per-scheme handler:

* ``http`` / ``https`` – fetched with ``requests`` (bounded by a timeout);
* ``file`` – read from the local filesystem.

Every fetched document is stored under its fragment-less URI and returned as
the *same* object on later fetches.  Cycle detection compares schema nodes by
identity, so a ``$ref`` loop spanning two remote documents is only caught if
both documents keep their identity across fetches.

Custom handlers can be added per scheme::

    resolver = DocumentResolver(handlers={"urn": my_urn_loader})
"""
from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urldefrag, urlsplit
from urllib.request import url2pathname

import requests

from schemawalk.errors import ResolutionError

logger = logging.getLogger(__name__)

#: ``(absolute_uri) -> decoded JSON document``; must raise ResolutionError on failure.
SchemeHandler = Callable[[str], Any]


class DocumentResolver:
    """Fetches and caches schema documents by absolute URI.

    Args:
        store: Documents preloaded by URI (fragments are ignored).
        fetch_remote: When ``False`` only the store is consulted.
        http_timeout: Timeout in seconds for HTTP(S) requests.
        handlers: Extra or replacement scheme handlers.
    """

    def __init__(
        self,
        store: Mapping[str, Any] | None = None,
        *,
        fetch_remote: bool = True,
        http_timeout: float = 10.0,
        handlers: Mapping[str, SchemeHandler] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, Any] = {}
        for uri, document in (store or {}).items():
            self._store[urldefrag(uri)[0]] = document
        self._fetch_remote = fetch_remote
        self._http_timeout = http_timeout
        self._handlers: dict[str, SchemeHandler] = {
            "http": self._fetch_http,
            "https": self._fetch_http,
            "file": self._fetch_file,
        }
        self._handlers.update(handlers or {})

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, uri: str, document: Any) -> None:
        """Preload ``document`` under ``uri`` (replacing any stored one)."""
        with self._lock:
            self._store[urldefrag(uri)[0]] = document

    def fetch(self, uri: str) -> Any:
        """Return the document at ``uri``.

        Args:
            uri: An absolute URI; any fragment is ignored.

        Raises:
            ResolutionError: If the document is not stored and cannot be
                fetched.
        """
        base = urldefrag(uri)[0]
        with self._lock:
            if base in self._store:
                return self._store[base]

        if not self._fetch_remote:
            raise ResolutionError(
                f"cannot load schema at {base}: remote fetching is disabled", uri=base
            )

        scheme = urlsplit(base).scheme
        handler = self._handlers.get(scheme)
        if handler is None:
            raise ResolutionError(
                f"cannot load schema at {base}: unsupported URI scheme '{scheme}'",
                uri=base,
            )

        logger.debug("fetching schema document at %s", base)
        document = handler(base)

        # Concurrent fetches of one URI: first writer wins, so all see one identity.
        with self._lock:
            return self._store.setdefault(base, document)

    @property
    def stored_uris(self) -> list[str]:
        """Return the sorted list of URIs currently held in the store."""
        with self._lock:
            return sorted(self._store)

    # ------------------------------------------------------------------
    # Built-in scheme handlers
    # ------------------------------------------------------------------

    def _fetch_http(self, uri: str) -> Any:
        try:
            response = requests.get(uri, timeout=self._http_timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ResolutionError(f"cannot load schema at {uri}: {exc}", uri=uri) from exc

    def _fetch_file(self, uri: str) -> Any:
        path = Path(url2pathname(urlsplit(uri).path))
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ResolutionError(f"cannot load schema at {uri}: {exc}", uri=uri) from exc
