"""Tests for atproto_openapi.converters.properties."""

from __future__ import annotations

from typing import Any

import pytest

from atproto_openapi.converters.properties import (
    convert_array_schema,
    convert_object_schema,
    convert_property,
)

DOC = "app.bsky.feed.defs"


class TestScalarFields:
    def test_boolean(self) -> None:
        assert convert_property(DOC, {"type": "boolean", "default": False}) == {
            "type": "boolean",
            "default": False,
        }

    def test_integer_constraints(self) -> None:
        prop = {"type": "integer", "minimum": 1, "maximum": 100, "default": 50}
        assert convert_property(DOC, prop) == {
            "type": "integer",
            "minimum": 1,
            "maximum": 100,
            "default": 50,
        }

    def test_string_datetime_format(self) -> None:
        assert convert_property(DOC, {"type": "string", "format": "datetime"}) == {
            "type": "string",
            "format": "date-time",
        }

    def test_string_lexicon_format_kept(self) -> None:
        assert convert_property(DOC, {"type": "string", "format": "at-uri"})["format"] == "at-uri"

    def test_string_known_values_become_examples(self) -> None:
        schema = convert_property(DOC, {"type": "string", "knownValues": ["a", "b"], "maxLength": 640})
        assert schema == {"type": "string", "maxLength": 640, "examples": ["a", "b"]}

    def test_grapheme_limits_dropped(self) -> None:
        schema = convert_property(DOC, {"type": "string", "maxGraphemes": 300})
        assert schema == {"type": "string"}

    @pytest.mark.parametrize(
        ("lexicon_type", "expected"),
        [
            ("bytes", {"type": "string", "format": "byte"}),
            ("cid-link", {"type": "string", "format": "cid"}),
            ("blob", {"type": "string", "format": "binary"}),
            ("unknown", {}),
            ("something-new", {}),
        ],
    )
    def test_special_types(self, lexicon_type: str, expected: dict[str, Any]) -> None:
        assert convert_property(DOC, {"type": lexicon_type}) == expected

    def test_description_copied(self) -> None:
        schema = convert_property(DOC, {"type": "boolean", "description": "Whether it is."})
        assert schema["description"] == "Whether it is."


class TestReferences:
    def test_local_ref(self) -> None:
        assert convert_property(DOC, {"type": "ref", "ref": "#postView"}) == {
            "$ref": "#/components/schemas/app.bsky.feed.defs.postView"
        }

    def test_ref_drops_description(self) -> None:
        schema = convert_property(DOC, {"type": "ref", "ref": "app.bsky.actor.defs#profileView", "description": "x"})
        assert schema == {"$ref": "#/components/schemas/app.bsky.actor.defs.profileView"}

    def test_union(self) -> None:
        schema = convert_property(DOC, {"type": "union", "refs": ["#reasonRepost", "app.bsky.feed.post"]})
        assert schema == {
            "oneOf": [
                {"$ref": "#/components/schemas/app.bsky.feed.defs.reasonRepost"},
                {"$ref": "#/components/schemas/app.bsky.feed.post"},
            ]
        }


class TestArrays:
    def test_items_and_bounds(self) -> None:
        schema = convert_array_schema(
            DOC, {"type": "array", "items": {"type": "string"}, "minLength": 1, "maxLength": 25}
        )
        assert schema == {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "maxItems": 25,
        }

    def test_nested_via_property(self) -> None:
        schema = convert_property(
            DOC, {"type": "array", "items": {"type": "ref", "ref": "#postView"}, "description": "Posts."}
        )
        assert schema["items"] == {"$ref": "#/components/schemas/app.bsky.feed.defs.postView"}
        assert schema["description"] == "Posts."


class TestObjects:
    def test_required_and_properties(self) -> None:
        schema = convert_object_schema(
            DOC,
            {
                "type": "object",
                "description": "A view.",
                "required": ["uri"],
                "properties": {"uri": {"type": "string", "format": "at-uri"}},
            },
        )
        assert schema == {
            "type": "object",
            "description": "A view.",
            "required": ["uri"],
            "properties": {"uri": {"type": "string", "format": "at-uri"}},
        }

    def test_empty_required_omitted(self) -> None:
        schema = convert_object_schema(DOC, {"type": "object", "properties": {}})
        assert schema == {"type": "object", "properties": {}}

    def test_nullable_properties(self) -> None:
        schema = convert_object_schema(
            DOC,
            {
                "type": "object",
                "nullable": ["reason"],
                "properties": {"reason": {"type": "ref", "ref": "#reasonRepost"}},
            },
        )
        assert schema["properties"]["reason"] == {
            "oneOf": [
                {"$ref": "#/components/schemas/app.bsky.feed.defs.reasonRepost"},
                {"type": "null"},
            ]
        }

    def test_inline_object_property(self) -> None:
        schema = convert_property(
            DOC,
            {"type": "object", "properties": {"n": {"type": "integer"}}, "description": "Inline."},
        )
        assert schema == {
            "type": "object",
            "description": "Inline.",
            "properties": {"n": {"type": "integer"}},
        }
