"""Rule bundle abstractions: the RuleBundle ABC and its syntax cache.

The Template Method pattern (GoF) is used:
- ``RuleBundle`` implements the four operations the validation context
  relies on (syntax check, syntax cache lookup, instance validator, format
  validator).
- ``DraftV3Bundle`` and ``DraftV4Bundle`` only supply their rule tables.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from schemawalk.schema.report import ValidationReport
from schemawalk.schema.version import SchemaVersion
from schemawalk.validate.formats import FormatRule
from schemawalk.validate.syntax import SyntaxRule, check_schema_syntax
from schemawalk.validate.validator import (
    AlwaysTrueValidator,
    FormatValidator,
    InstanceValidator,
    KeywordRule,
    Validator,
)

if TYPE_CHECKING:
    from schemawalk.schema.context import ValidationContext

logger = logging.getLogger(__name__)


class SyntaxCache:
    """Identity-keyed record of schema nodes that passed syntax checking.

    Two equal but distinct nodes are separate entries.  The cache holds a
    reference to every node it records, so an ``id()`` is never reused for
    another node while the cache lives.  Inserts are at-most-once per node.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, Any] = {}
        self._lock = threading.Lock()

    def __contains__(self, node: Any) -> bool:
        with self._lock:
            return self._nodes.get(id(node)) is node

    def add(self, node: Any) -> None:
        with self._lock:
            self._nodes.setdefault(id(node), node)

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)


class RuleBundle(ABC):
    """Syntax, keyword, and format rules for one schema dialect.

    Args:
        cache: Syntax cache to use; a fresh one by default.  Its lifetime is
            the bundle's, which in turn is the owning engine's.
    """

    def __init__(self, cache: SyntaxCache | None = None) -> None:
        self._cache = cache if cache is not None else SyntaxCache()

    @property
    @abstractmethod
    def version(self) -> SchemaVersion:
        """The dialect these rules implement."""

    @property
    @abstractmethod
    def syntax_rules(self) -> Mapping[str, SyntaxRule]:
        """Keyword name to the syntax rule for its value."""

    @property
    @abstractmethod
    def keyword_rules(self) -> Mapping[str, KeywordRule]:
        """Keyword name to the instance rule applying it."""

    @property
    @abstractmethod
    def format_rules(self) -> Mapping[str, FormatRule]:
        """Format name to format rule."""

    # ------------------------------------------------------------------
    # Operations used by ValidationContext
    # ------------------------------------------------------------------

    def is_syntax_validated(self, node: Any) -> bool:
        return node in self._cache

    def check_syntax(self, ctx: ValidationContext) -> ValidationReport:
        """Check the current schema of ``ctx``; cache it on success."""
        report = check_schema_syntax(ctx, self.syntax_rules)
        if report.is_success:
            self._cache.add(ctx.current_schema())
        return report

    def build_instance_validator(self, ctx: ValidationContext, instance: Any) -> Validator:
        return InstanceValidator(ctx, instance, self.keyword_rules)

    def build_format_validator(
        self, ctx: ValidationContext, format_name: str, instance: Any
    ) -> Validator:
        """Return the validator for ``format_name``; unknown formats pass."""
        rule = self.format_rules.get(format_name)
        if rule is None:
            logger.debug("format %r not supported by %s, ignoring", format_name, self.version.name)
            return AlwaysTrueValidator(ctx)
        return FormatValidator(ctx, instance, rule)
