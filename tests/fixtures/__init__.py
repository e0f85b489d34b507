"""Test fixtures: sample schema documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from schemawalk.schema.version import SchemaVersion

_FIXTURES_DIR = Path(__file__).parent

#: Base URI under which ``address.json`` is preloaded by ``remote_store``.
ADDRESS_URI = "http://schemas.example.com/address.json"

#: Locator of the draft v4 dialect, for schemas that declare it explicitly.
DRAFT4 = SchemaVersion.DRAFT_V4.locator


def load_schema(name: str) -> Any:
    """Load ``schemas/<name>.json`` as a fresh document."""
    return json.loads((_FIXTURES_DIR / "schemas" / f"{name}.json").read_text())


def schema_path(name: str) -> Path:
    """Return the filesystem path of ``schemas/<name>.json``."""
    return _FIXTURES_DIR / "schemas" / f"{name}.json"


def remote_store() -> dict[str, Any]:
    """A URI → document store holding the address schema."""
    return {ADDRESS_URI: load_schema("address")}
