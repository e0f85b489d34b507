"""Shared pytest fixtures for schemawalk tests."""
from __future__ import annotations

import pytest

from schemawalk import EngineConfig, SchemaValidator, SchemaVersion
from tests.fixtures import remote_store


@pytest.fixture
def engine() -> SchemaValidator:
    """Offline draft v3 engine (the default dialect)."""
    return SchemaValidator(EngineConfig(fetch_remote=False))


@pytest.fixture
def engine_v4() -> SchemaValidator:
    """Offline engine defaulting to draft v4."""
    return SchemaValidator(
        EngineConfig(default_version=SchemaVersion.DRAFT_V4, fetch_remote=False)
    )


@pytest.fixture
def remote_engine() -> SchemaValidator:
    """Offline draft v4 engine with the address schema preloaded by URI.

    Sub-schemas carry no ``$schema`` of their own, so the engine default
    must match the document dialect.
    """
    return SchemaValidator(
        EngineConfig(
            default_version=SchemaVersion.DRAFT_V4,
            store=remote_store(),
            fetch_remote=False,
        )
    )
