"""Draft v3 rule bundle."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from schemawalk.bundle.base import RuleBundle
from schemawalk.schema.version import SchemaVersion
from schemawalk.validate import keywords as kw
from schemawalk.validate.formats import DRAFT3_FORMATS, FormatRule
from schemawalk.validate.syntax import DRAFT3_SYNTAX, SyntaxRule
from schemawalk.validate.validator import KeywordRule

DRAFT3_KEYWORDS: Mapping[str, KeywordRule] = MappingProxyType({
    "$ref": kw.ref,
    "type": kw.type_v3,
    "disallow": kw.disallow,
    "extends": kw.extends,
    "enum": kw.enum,
    "minimum": kw.minimum,
    "maximum": kw.maximum,
    "divisibleBy": kw.divisible_by,
    "minLength": kw.min_length,
    "maxLength": kw.max_length,
    "pattern": kw.pattern,
    "format": kw.format_,
    "properties": kw.properties_v3,
    "patternProperties": kw.pattern_properties,
    "additionalProperties": kw.additional_properties,
    "dependencies": kw.dependencies,
    "items": kw.items,
    "additionalItems": kw.additional_items,
    "minItems": kw.min_items,
    "maxItems": kw.max_items,
    "uniqueItems": kw.unique_items,
})


class DraftV3Bundle(RuleBundle):
    """Rules for ``http://json-schema.org/draft-03/schema#``.

    Differences from draft v4 handled here: ``type`` unions may contain
    schemas and the ``any`` type, ``required`` is a boolean on the member
    schema, ``extends``/``disallow``/``divisibleBy`` exist, and the IPv4
    format is named ``ip-address``.
    """

    @property
    def version(self) -> SchemaVersion:
        return SchemaVersion.DRAFT_V3

    @property
    def syntax_rules(self) -> Mapping[str, SyntaxRule]:
        return DRAFT3_SYNTAX

    @property
    def keyword_rules(self) -> Mapping[str, KeywordRule]:
        return DRAFT3_KEYWORDS

    @property
    def format_rules(self) -> Mapping[str, FormatRule]:
        return DRAFT3_FORMATS
