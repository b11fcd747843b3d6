"""Tests for atproto_openapi.generator.dispatcher."""

from __future__ import annotations

import dataclasses

import pytest

from atproto_openapi.exceptions import UnknownDefinitionTypeError
from atproto_openapi.exit_codes import EXIT_UNKNOWN_DEFINITION_TYPE
from atproto_openapi.generator.dispatcher import DEFAULT_CONVERTERS, dispatch, path_key_for
from atproto_openapi.models import HTTPMethod, NoEntry, PathEntry, SchemaEntry

DOC = "com.example.getThing"


class TestSchemaKinds:
    @pytest.mark.parametrize(
        ("kind", "extra"),
        [
            ("array", {"items": {"type": "string"}}),
            ("object", {"properties": {}}),
            ("record", {"key": "tid", "record": {"type": "object", "properties": {}}}),
            ("string", {}),
            ("token", {}),
        ],
    )
    def test_schema_entry_keyed_by_identifier(self, kind: str, extra: dict, definition) -> None:
        result = dispatch(DOC, "thing", definition(type=kind, **extra))
        assert isinstance(result, SchemaEntry)
        assert result.identifier == "com.example.getThing.thing"
        assert isinstance(result.value, dict)

    def test_main_schema_uses_document_id(self, definition) -> None:
        result = dispatch(DOC, "main", definition(type="object", properties={}))
        assert result.identifier == DOC


class TestOperationKinds:
    def test_query_is_get(self, definition) -> None:
        result = dispatch(DOC, "main", definition(type="query"))
        assert isinstance(result, PathEntry)
        assert result.path_key == "/com.example.getThing"
        assert result.method is HTTPMethod.GET

    def test_procedure_is_post(self, definition) -> None:
        result = dispatch("com.example.doThing", "main", definition(type="procedure"))
        assert isinstance(result, PathEntry)
        assert result.path_key == "/com.example.doThing"
        assert result.method is HTTPMethod.POST

    def test_path_uses_document_id_not_identifier(self, definition) -> None:
        result = dispatch(DOC, "other", definition(type="query"))
        assert result.path_key == path_key_for(DOC) == "/com.example.getThing"

    def test_unrepresentable_operation(self, definition) -> None:
        converters = dataclasses.replace(DEFAULT_CONVERTERS, query=lambda *_: None)
        result = dispatch(DOC, "main", definition(type="query"), converters)
        assert isinstance(result, NoEntry)
        assert result.identifier == DOC

    def test_converter_receives_arguments(self, definition) -> None:
        calls = []

        def fake_procedure(document_id, def_name, defn):
            calls.append((document_id, def_name, defn.type))
            return {"operationId": "fake"}

        converters = dataclasses.replace(DEFAULT_CONVERTERS, procedure=fake_procedure)
        result = dispatch("com.example.doThing", "main", definition(type="procedure"), converters)
        assert calls == [("com.example.doThing", "main", "procedure")]
        assert result.value == {"operationId": "fake"}


class TestDroppedAndUnknown:
    def test_subscription_dropped(self, definition) -> None:
        result = dispatch("com.atproto.sync.subscribeRepos", "main", definition(type="subscription"))
        assert isinstance(result, NoEntry)
        assert "subscription" in result.reason

    def test_unknown_type_raises(self, definition) -> None:
        with pytest.raises(UnknownDefinitionTypeError, match="nonsense") as exc_info:
            dispatch(DOC, "main", definition(type="nonsense"))
        assert exc_info.value.identifier == DOC
        assert exc_info.value.exit_code == EXIT_UNKNOWN_DEFINITION_TYPE

    def test_type_is_case_sensitive(self, definition) -> None:
        with pytest.raises(UnknownDefinitionTypeError):
            dispatch(DOC, "main", definition(type="Query"))

    @pytest.mark.parametrize("value", [None, 3, ["query"], {"type": "query"}])
    def test_missing_or_non_string_type_raises(self, value: object, definition) -> None:
        with pytest.raises(UnknownDefinitionTypeError) as exc_info:
            dispatch(DOC, "main", definition(type=value))
        assert exc_info.value.type == value

    @pytest.mark.parametrize("field_type", ["integer", "boolean", "ref", "union", "params"])
    def test_field_types_are_not_definition_kinds(self, field_type: str, definition) -> None:
        with pytest.raises(UnknownDefinitionTypeError):
            dispatch(DOC, "main", definition(type=field_type))
