"""Convert named lexicon data definitions into OpenAPI component schemas.

Each converter takes ``(document_id, def_name, definition)`` and returns a
new Schema Object. They never fail on well-typed input; fields they do not
understand are dropped.
"""

from __future__ import annotations

from typing import Any

from atproto_openapi.converters.properties import (
    convert_array_schema,
    convert_object_schema,
    convert_property,
)
from atproto_openapi.lexicon.identifiers import MAIN_DEF
from atproto_openapi.models import LexiconDefinition


def _raw(definition: LexiconDefinition) -> dict[str, Any]:
    return definition.model_dump(exclude_none=True)


def convert_array(document_id: str, def_name: str, definition: LexiconDefinition) -> dict[str, Any]:
    """Convert an ``array`` definition."""
    schema = convert_array_schema(document_id, _raw(definition))
    if definition.description:
        schema["description"] = definition.description
    return schema


def convert_object(document_id: str, def_name: str, definition: LexiconDefinition) -> dict[str, Any]:
    """Convert an ``object`` definition."""
    return convert_object_schema(document_id, _raw(definition))


def convert_record(document_id: str, def_name: str, definition: LexiconDefinition) -> dict[str, Any]:
    """Convert a ``record`` definition into the schema of its ``record`` object.

    The record's own description takes precedence over the inner object's.
    """
    schema = convert_object_schema(document_id, definition.get("record", {}))
    if definition.description:
        schema["description"] = definition.description
    return schema


def convert_string(document_id: str, def_name: str, definition: LexiconDefinition) -> dict[str, Any]:
    """Convert a standalone ``string`` definition."""
    return convert_property(document_id, _raw(definition))


def convert_token(document_id: str, def_name: str, definition: LexiconDefinition) -> dict[str, Any]:
    """Convert a ``token`` definition into a constant string.

    Tokens are referenced by value as ``nsid#name`` (or ``nsid`` for a
    ``main`` token), which is the constant the schema admits.
    """
    value = document_id if def_name == MAIN_DEF else f"{document_id}#{def_name}"
    schema: dict[str, Any] = {"type": "string", "const": value}
    if definition.description:
        schema["description"] = definition.description
    return schema
