"""Engine configuration.

``EngineConfig`` is passed once to :class:`~schemawalk.SchemaValidator` and
applies to every validation run made through that engine::

    engine = SchemaValidator(
        EngineConfig(
            default_version=SchemaVersion.DRAFT_V4,
            store={"http://example.com/common.json": common_schema},
            fetch_remote=False,
        )
    )
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemawalk.schema.version import DEFAULT_VERSION, SchemaVersion


class EngineConfig(BaseModel):
    """Configuration for one validation engine.

    Attributes:
        default_version: Dialect assumed when a schema declares no
            recognised ``$schema``.
        store: Schema documents preloaded by absolute URI.  Consulted before
            any network or filesystem access.
        fetch_remote: Allow ``http``, ``https`` and ``file`` fetching for
            URIs not in ``store``.
        http_timeout: Timeout in seconds for each HTTP(S) fetch.
    """

    model_config = ConfigDict(extra="forbid")

    default_version: SchemaVersion = DEFAULT_VERSION
    store: dict[str, Any] = Field(default_factory=dict)
    fetch_remote: bool = True
    http_timeout: float = Field(default=10.0, gt=0)
