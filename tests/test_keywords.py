"""Unit tests for keyword rules and schema syntax checks, per draft."""
from __future__ import annotations

import pytest


def _messages(engine, instance, schema, **kwargs) -> list[str]:
    return engine.validate(instance, schema, **kwargs).messages


# ---------------------------------------------------------------------------
# Shared keywords (draft v4 engine)
# ---------------------------------------------------------------------------


class TestNumbers:
    def test_minimum(self, engine_v4):
        assert _messages(engine_v4, 0, {"minimum": 1}) == [
            "#: number is lower than the required minimum 1"
        ]
        assert _messages(engine_v4, 1, {"minimum": 1}) == []

    def test_exclusive_minimum(self, engine_v4):
        assert _messages(engine_v4, 1, {"minimum": 1, "exclusiveMinimum": True}) == [
            "#: number is not strictly greater than 1"
        ]

    def test_maximum(self, engine_v4):
        assert _messages(engine_v4, 4, {"maximum": 3}) == [
            "#: number is greater than the required maximum 3"
        ]
        assert _messages(engine_v4, 3, {"maximum": 3, "exclusiveMaximum": True}) == [
            "#: number is not strictly lower than 3"
        ]

    def test_multiple_of_uses_decimal_arithmetic(self, engine_v4):
        assert _messages(engine_v4, 19.99, {"multipleOf": 0.01}) == []
        assert _messages(engine_v4, 7, {"multipleOf": 2}) == ["#: number is not a multiple of 2"]

    @pytest.mark.parametrize(
        "instance, divisor, ok",
        [
            (10**30, 7, False),
            (7 * 10**30, 7, True),
            (1e300, 0.3, False),
            (1e300, 5, True),
            (10**40, 0.5, True),
        ],
    )
    def test_multiple_of_large_values(self, engine_v4, instance, divisor, ok):
        messages = _messages(engine_v4, instance, {"multipleOf": divisor})
        assert messages == ([] if ok else [f"#: number is not a multiple of {divisor}"])

    def test_numeric_keywords_ignore_other_types(self, engine_v4):
        schema = {"minimum": 5, "maximum": 6, "multipleOf": 2}
        assert _messages(engine_v4, "text", schema) == []
        assert _messages(engine_v4, True, schema) == []


class TestStrings:
    def test_length_bounds(self, engine_v4):
        schema = {"minLength": 2, "maxLength": 3}
        assert _messages(engine_v4, "a", schema) == ["#: string is shorter than 2 character(s)"]
        assert _messages(engine_v4, "abcd", schema) == ["#: string is longer than 3 character(s)"]
        assert _messages(engine_v4, "abc", schema) == []

    def test_pattern_is_unanchored(self, engine_v4):
        assert _messages(engine_v4, "xxabyy", {"pattern": "ab"}) == []
        assert _messages(engine_v4, "ba", {"pattern": "^a"}) == [
            "#: string does not match pattern '^a'"
        ]


class TestTypesAndEnum:
    def test_type(self, engine_v4):
        assert _messages(engine_v4, 1.5, {"type": ["integer", "string"]}) == [
            "#: instance is of type number, which is none of the allowed types ['integer', 'string']"
        ]
        assert _messages(engine_v4, 3, {"type": "number"}) == []
        assert _messages(engine_v4, True, {"type": "integer"}) != []

    def test_enum_uses_json_equality(self, engine_v4):
        schema = {"enum": [1, "a", {"x": [1]}]}
        assert _messages(engine_v4, 1.0, schema) == []
        assert _messages(engine_v4, {"x": [1]}, schema) == []
        assert _messages(engine_v4, True, schema) == ["#: instance does not match any enum value"]


class TestObjects:
    def test_required(self, engine_v4):
        assert _messages(engine_v4, {"a": 1}, {"required": ["a", "b"]}) == [
            "#: required property(ies) missing: ['b']"
        ]

    def test_member_schemas_by_name_pattern_and_fallback(self, engine_v4):
        schema = {
            "properties": {"a": {}},
            "patternProperties": {"^x-": {"type": "string"}},
            "additionalProperties": {"type": "integer"},
        }
        instance = {"a": None, "x-1": 5, "b": "s"}
        assert _messages(engine_v4, instance, schema) == [
            "#/x-1: instance is of type integer, which is none of the allowed types ['string']",
            "#/b: instance is of type string, which is none of the allowed types ['integer']",
        ]

    def test_additional_properties_false(self, engine_v4):
        schema = {"properties": {"a": {}}, "additionalProperties": False}
        assert _messages(engine_v4, {"a": 1, "z": 2, "y": 3}, schema) == [
            "#: additional properties not permitted: ['y', 'z']"
        ]

    def test_dependencies(self, engine_v4):
        schema = {"dependencies": {"a": ["b"], "c": {"required": ["d"]}}}
        assert _messages(engine_v4, {"a": 1, "c": 1}, schema) == [
            "#: property 'a' requires missing property(ies) ['b']",
            "#: required property(ies) missing: ['d']",
        ]
        assert _messages(engine_v4, {"b": 1}, schema) == []

    def test_member_count(self, engine_v4):
        schema = {"minProperties": 1, "maxProperties": 2}
        assert _messages(engine_v4, {}, schema) == ["#: object has fewer than 1 member(s)"]
        assert _messages(engine_v4, {"a": 1, "b": 2, "c": 3}, schema) == [
            "#: object has more than 2 member(s)"
        ]

    def test_member_names_become_path_segments(self, engine_v4):
        schema = {"properties": {"a/b": {"type": "string"}}}
        assert _messages(engine_v4, {"a/b": 1}, schema)[0].startswith("#/a~1b: ")


class TestArrays:
    def test_items_schema_applies_to_every_element(self, engine_v4):
        assert _messages(engine_v4, [1, "x", 2], {"items": {"type": "integer"}}) == [
            "#/1: instance is of type string, which is none of the allowed types ['integer']"
        ]

    def test_tuple_items_and_additional_items(self, engine_v4):
        closed = {"items": [{"type": "integer"}], "additionalItems": False}
        assert _messages(engine_v4, [1], closed) == []
        assert _messages(engine_v4, [1, "x"], closed) == [
            "#: array has more than the 1 element(s) allowed"
        ]
        typed = {"items": [{}], "additionalItems": {"type": "string"}}
        assert _messages(engine_v4, [1, 2], typed) == [
            "#/1: instance is of type integer, which is none of the allowed types ['string']"
        ]

    def test_additional_items_ignored_without_tuple(self, engine_v4):
        assert _messages(engine_v4, [1, 2], {"items": {}, "additionalItems": False}) == []

    def test_element_count(self, engine_v4):
        schema = {"minItems": 1, "maxItems": 2}
        assert _messages(engine_v4, [], schema) == ["#: array has fewer than 1 element(s)"]
        assert _messages(engine_v4, [1, 2, 3], schema) == ["#: array has more than 2 element(s)"]

    def test_unique_items(self, engine_v4):
        schema = {"uniqueItems": True}
        assert _messages(engine_v4, [1, True, "1"], schema) == []
        assert _messages(engine_v4, [[1], [1]], schema) == ["#: array elements are not unique"]
        assert _messages(engine_v4, [1, 1.0], schema) == ["#: array elements are not unique"]


class TestCombinators:
    def test_all_of(self, engine_v4):
        schema = {"allOf": [{"minimum": 1}, {"maximum": 0}]}
        assert _messages(engine_v4, 5, schema) == [
            "#: number is greater than the required maximum 0"
        ]

    def test_any_of_reports_every_branch(self, engine_v4):
        schema = {"anyOf": [{"type": "string"}, {"minimum": 5}]}
        assert _messages(engine_v4, 7, schema) == []
        assert _messages(engine_v4, 3, schema) == [
            "#: instance matched none of the anyOf schemas",
            "#: instance is of type integer, which is none of the allowed types ['string']",
            "#: number is lower than the required minimum 5",
        ]

    def test_one_of(self, engine_v4):
        schema = {"oneOf": [{"type": "integer"}, {"minimum": 0}]}
        assert _messages(engine_v4, -1, schema) == []
        assert _messages(engine_v4, 5, schema) == [
            "#: instance matched 2 of the oneOf schemas, expected exactly one"
        ]
        assert _messages(engine_v4, -0.5, schema)[0] == "#: instance matched none of the oneOf schemas"

    def test_not(self, engine_v4):
        assert _messages(engine_v4, "x", {"not": {"type": "string"}}) == [
            "#: instance matched a schema it must not match"
        ]
        assert _messages(engine_v4, 1, {"not": {"type": "string"}}) == []


class TestReferences:
    def test_ref_overrides_sibling_keywords(self, engine_v4):
        schema = {
            "definitions": {"s": {"type": "string"}},
            "$ref": "#/definitions/s",
            "minLength": 10,
        }
        assert _messages(engine_v4, "ab", schema) == []

    def test_ref_fragment_is_percent_decoded(self, engine_v4):
        schema = {"definitions": {"a b": {"type": "string"}}, "$ref": "#/definitions/a%20b"}
        assert _messages(engine_v4, 1, schema) == [
            "#: instance is of type integer, which is none of the allowed types ['string']"
        ]

    def test_unfetchable_ref_is_reported(self, engine):
        messages = _messages(engine, {}, {"$ref": "http://example.com/other.json#"})
        assert len(messages) == 1
        assert messages[0].startswith("#: cannot load schema at http://example.com/other.json")
        assert "remote fetching is disabled" in messages[0]

    def test_relative_ref_without_base_is_reported(self, engine):
        messages = _messages(engine, {}, {"$ref": "other.json"})
        assert len(messages) == 1
        assert "not absolute" in messages[0]

    def test_malformed_pointer_is_reported(self, engine):
        messages = _messages(engine, {}, {"$ref": "#definitions"})
        assert len(messages) == 1
        assert messages[0].startswith("#: ")

    def test_unparsable_ref_fails_only_its_branch(self, engine):
        schema = {
            "properties": {
                "a": {"$ref": "http://[bad/x.json#"},
                "b": {"type": "integer"},
            }
        }
        messages = _messages(engine, {"a": 1, "b": "x"}, schema)
        assert len(messages) == 2
        assert messages[0].startswith("#/a: invalid URI 'http://[bad/x.json#'")
        assert messages[1] == (
            "#/b: instance is of type string, which is none of the allowed types ['integer']"
        )

    def test_unparsable_relative_ref_with_base_is_reported(self, engine):
        schema = {"$ref": "http://[bad/x.json"}
        messages = _messages(engine, 1, schema, base_uri="http://example.com/root.json")
        assert len(messages) == 1
        assert messages[0].startswith("#: invalid URI")

    def test_relative_ref_resolves_against_base_uri(self, remote_engine):
        schema = {"$ref": "address.json#/definitions/address"}
        base = "http://schemas.example.com/root.json"
        assert _messages(remote_engine, {"street": "x"}, schema, base_uri=base) == []
        assert _messages(remote_engine, {"street": "x", "ip": "1.2.3.999"}, schema, base_uri=base) == [
            "#/ip: string is not a valid IPv4 address"
        ]

    def test_refs_inside_remote_document_stay_in_that_document(self, remote_engine):
        schema = {"$ref": "http://schemas.example.com/address.json#/definitions/addresses"}
        assert _messages(remote_engine, [{"street": "a"}, {}], schema) == [
            "#/1: required property(ies) missing: ['street']"
        ]


class TestFormats:
    def test_format_applies_only_to_strings(self, engine_v4):
        assert _messages(engine_v4, "1.2.3", {"format": "ipv4"}) == [
            "#: string is not a valid IPv4 address"
        ]
        assert _messages(engine_v4, 5, {"format": "ipv4"}) == []

    def test_format_names_are_per_draft(self, engine, engine_v4):
        assert _messages(engine, "1.2.3", {"format": "ip-address"}) == [
            "#: string is not a valid IPv4 address"
        ]
        assert _messages(engine_v4, "1.2.3", {"format": "ip-address"}) == []
        assert _messages(engine, "1.2.3", {"format": "ipv4"}) == []


# ---------------------------------------------------------------------------
# Draft v3 specifics (default engine)
# ---------------------------------------------------------------------------


class TestDraftV3:
    def test_type_union_with_schema_member(self, engine):
        schema = {"type": ["string", {"type": "integer", "minimum": 5}]}
        assert _messages(engine, "x", schema) == []
        assert _messages(engine, 7, schema) == []
        assert _messages(engine, 2, schema) == [
            "#: instance is of type integer, which is none of the allowed types ['string']"
        ]

    def test_any_type(self, engine):
        assert _messages(engine, None, {"type": "any"}) == []

    def test_disallow(self, engine):
        assert _messages(engine, "x", {"disallow": "string"}) == [
            "#: instance is of disallowed type string"
        ]
        assert _messages(engine, 1, {"disallow": ["string", "null"]}) == []

    def test_member_level_required(self, engine):
        schema = {"properties": {"a": {"required": True}, "b": {"required": False}}}
        assert _messages(engine, {}, schema) == ["#: required property 'a' is missing"]

    def test_extends(self, engine):
        assert _messages(engine, 1, {"extends": {"minimum": 3}}) == [
            "#: number is lower than the required minimum 3"
        ]
        assert _messages(engine, 1, {"extends": [{"minimum": 0}, {"maximum": 0}]}) == [
            "#: number is greater than the required maximum 0"
        ]

    def test_divisible_by(self, engine):
        assert _messages(engine, 0.3, {"divisibleBy": 0.1}) == []
        assert _messages(engine, 0.35, {"divisibleBy": 0.1}) == [
            "#: number is not a multiple of 0.1"
        ]

    def test_string_dependency(self, engine):
        assert _messages(engine, {"a": 1}, {"dependencies": {"a": "b"}}) == [
            "#: property 'a' requires missing property(ies) ['b']"
        ]

    def test_draft_v4_keywords_are_ignored(self, engine):
        assert _messages(engine, 5, {"allOf": [{"maximum": 0}], "multipleOf": 2}) == []


# ---------------------------------------------------------------------------
# Schema syntax
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "schema, message",
    [
        ({"maximum": "3"}, "maximum: value has wrong type string (expected number)"),
        ({"minItems": 1.5}, "minItems: value has wrong type number (expected integer)"),
        ({"minLength": -1}, "minLength: value must not be negative (found -1)"),
        ({"multipleOf": 0}, "multipleOf: value must be strictly positive (found 0)"),
        ({"properties": {"a": 1}}, "properties: member(s) ['a'] are not schemas"),
        ({"anyOf": []}, "anyOf: array must not be empty"),
        ({"enum": [1, 1.0]}, "enum: array elements must be unique"),
        ({"type": "strnig"}, "type: unknown type(s) ['strnig']"),
        ({"type": [{"type": "string"}]}, "type: type array elements must be strings"),
        ({"type": ["string", ["null"]]}, "type: type array elements must be strings"),
        ({"required": []}, "required: array must not be empty"),
        ({"additionalItems": "no"}, "additionalItems: value has wrong type string (expected boolean, object)"),
    ],
)
def test_draft_v4_syntax_errors(engine_v4, schema, message):
    assert engine_v4.check_schema(schema).messages == ["# [schema]: " + message]


def test_invalid_regex_is_a_syntax_error(engine_v4):
    messages = engine_v4.check_schema({"pattern": "("}).messages
    assert messages[0].startswith("# [schema]: pattern: invalid regular expression '('")


def test_syntax_errors_accumulate(engine_v4):
    assert len(engine_v4.check_schema({"minLength": -1, "maxLength": "x"}).messages) == 2


def test_draft_v3_required_must_be_boolean(engine):
    assert engine.check_schema({"required": ["a"]}).messages == [
        "# [schema]: required: value has wrong type array (expected boolean)"
    ]


def test_draft_v3_type_union_members(engine):
    assert engine.check_schema({"type": ["string", 1]}).messages == [
        "# [schema]: type: type union members must be strings or schemas (found integer)"
    ]


def test_unknown_keywords_are_ignored(engine_v4):
    assert engine_v4.check_schema({"x-custom": [1, 2], "title": "t"}).is_success


def test_syntax_check_is_shallow(engine_v4):
    assert engine_v4.check_schema({"properties": {"a": {"minimum": "x"}}}).is_success


def test_nested_syntax_error_is_scoped_to_instance_path(engine_v4):
    assert _messages(engine_v4, 1, {"allOf": [{"minimum": "x"}]}) == [
        "# [schema]: minimum: value has wrong type string (expected number)"
    ]


def test_non_string_type_member_fails_only_its_branch(engine_v4):
    schema = {
        "properties": {
            "a": {"type": [{"type": "string"}]},
            "b": {"type": "string"},
        }
    }
    assert _messages(engine_v4, {"a": 1, "b": 2}, schema) == [
        "#/a [schema]: type: type array elements must be strings",
        "#/b: instance is of type integer, which is none of the allowed types ['string']",
    ]


def test_divisible_by_large_integer(engine):
    assert _messages(engine, 10**40, {"divisibleBy": 3}) == ["#: number is not a multiple of 3"]
    assert _messages(engine, 3 * 10**40, {"divisibleBy": 3}) == []
