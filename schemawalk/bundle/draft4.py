"""Draft v4 rule bundle."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from schemawalk.bundle.base import RuleBundle
from schemawalk.schema.version import SchemaVersion
from schemawalk.validate import keywords as kw
from schemawalk.validate.formats import DRAFT4_FORMATS, FormatRule
from schemawalk.validate.syntax import DRAFT4_SYNTAX, SyntaxRule
from schemawalk.validate.validator import KeywordRule

DRAFT4_KEYWORDS: Mapping[str, KeywordRule] = MappingProxyType({
    "$ref": kw.ref,
    "type": kw.type_v4,
    "enum": kw.enum,
    "minimum": kw.minimum,
    "maximum": kw.maximum,
    "multipleOf": kw.multiple_of,
    "minLength": kw.min_length,
    "maxLength": kw.max_length,
    "pattern": kw.pattern,
    "format": kw.format_,
    "properties": kw.properties,
    "required": kw.required_v4,
    "patternProperties": kw.pattern_properties,
    "additionalProperties": kw.additional_properties,
    "dependencies": kw.dependencies,
    "minProperties": kw.min_properties,
    "maxProperties": kw.max_properties,
    "items": kw.items,
    "additionalItems": kw.additional_items,
    "minItems": kw.min_items,
    "maxItems": kw.max_items,
    "uniqueItems": kw.unique_items,
    "allOf": kw.all_of,
    "anyOf": kw.any_of,
    "oneOf": kw.one_of,
    "not": kw.not_,
})


class DraftV4Bundle(RuleBundle):
    """Rules for ``http://json-schema.org/draft-04/schema#``."""

    @property
    def version(self) -> SchemaVersion:
        return SchemaVersion.DRAFT_V4

    @property
    def syntax_rules(self) -> Mapping[str, SyntaxRule]:
        return DRAFT4_SYNTAX

    @property
    def keyword_rules(self) -> Mapping[str, KeywordRule]:
        return DRAFT4_KEYWORDS

    @property
    def format_rules(self) -> Mapping[str, FormatRule]:
        return DRAFT4_FORMATS
