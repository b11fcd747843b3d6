"""Map lexicon field definitions onto JSON Schema fragments.

Lexicon field types translate as follows:

=============  ==========================================================
Lexicon        JSON Schema
=============  ==========================================================
``boolean``    ``{"type": "boolean"}``
``integer``    ``{"type": "integer"}`` with range/enum constraints
``string``     ``{"type": "string"}``; ``datetime`` becomes ``date-time``
``bytes``      ``{"type": "string", "format": "byte"}``
``cid-link``   ``{"type": "string", "format": "cid"}``
``blob``       ``{"type": "string", "format": "binary"}``
``unknown``    ``{}`` (any value)
``ref``        ``$ref`` into ``components.schemas``
``union``      ``oneOf`` of ``$ref`` entries
``array``      ``{"type": "array", "items": ...}``
``object``     ``{"type": "object", "properties": ...}``
=============  ==========================================================

Unrecognised field types fall back to ``{}`` so a single exotic field never
blocks the surrounding schema.
"""

from __future__ import annotations

from typing import Any

from atproto_openapi.lexicon.identifiers import ref_to_identifier, schema_ref

# Lexicon string formats whose JSON Schema name differs
_STRING_FORMATS = {"datetime": "date-time"}

# Constraint keys copied verbatim per field type
_INTEGER_KEYS = ("minimum", "maximum", "enum", "default", "const")
_STRING_KEYS = ("minLength", "maxLength", "enum", "default", "const")
_BOOLEAN_KEYS = ("default", "const")


def convert_property(document_id: str, prop: dict[str, Any]) -> dict[str, Any]:
    """Convert one lexicon field definition into a JSON Schema object.

    Args:
        document_id: Id of the lexicon the field belongs to, used to resolve
            local refs.
        prop: The raw lexicon field definition.

    Returns:
        A new JSON Schema dict.
    """
    prop_type = prop.get("type")

    if prop_type == "boolean":
        schema = _with_keys({"type": "boolean"}, prop, _BOOLEAN_KEYS)
    elif prop_type == "integer":
        schema = _with_keys({"type": "integer"}, prop, _INTEGER_KEYS)
    elif prop_type == "string":
        schema = _convert_string(prop)
    elif prop_type == "bytes":
        schema = {"type": "string", "format": "byte"}
    elif prop_type == "cid-link":
        schema = {"type": "string", "format": "cid"}
    elif prop_type == "blob":
        schema = {"type": "string", "format": "binary"}
    elif prop_type == "ref":
        # $ref siblings are ignored by most tooling, so no description
        return schema_ref(ref_to_identifier(document_id, prop["ref"]))
    elif prop_type == "union":
        schema = {
            "oneOf": [
                schema_ref(ref_to_identifier(document_id, ref))
                for ref in prop.get("refs", [])
            ]
        }
    elif prop_type == "array":
        schema = convert_array_schema(document_id, prop)
    elif prop_type == "object":
        return convert_object_schema(document_id, prop)
    else:
        schema = {}

    if prop.get("description"):
        schema["description"] = prop["description"]
    return schema


def convert_object_schema(document_id: str, obj: dict[str, Any]) -> dict[str, Any]:
    """Convert a lexicon ``object`` into a JSON Schema object.

    Properties listed in ``nullable`` accept an explicit ``null`` in addition
    to their declared schema.
    """
    nullable = set(obj.get("nullable", []))
    properties: dict[str, Any] = {}
    for name, prop in obj.get("properties", {}).items():
        converted = convert_property(document_id, prop)
        if name in nullable:
            converted = {"oneOf": [converted, {"type": "null"}]}
        properties[name] = converted

    schema: dict[str, Any] = {"type": "object"}
    if obj.get("description"):
        schema["description"] = obj["description"]
    required = obj.get("required", [])
    if required:
        schema["required"] = list(required)
    schema["properties"] = properties
    return schema


def convert_array_schema(document_id: str, arr: dict[str, Any]) -> dict[str, Any]:
    """Convert a lexicon ``array`` into a JSON Schema array."""
    schema: dict[str, Any] = {
        "type": "array",
        "items": convert_property(document_id, arr.get("items", {})),
    }
    if "minLength" in arr:
        schema["minItems"] = arr["minLength"]
    if "maxLength" in arr:
        schema["maxItems"] = arr["maxLength"]
    return schema


def _convert_string(prop: dict[str, Any]) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    fmt = prop.get("format")
    if fmt:
        schema["format"] = _STRING_FORMATS.get(fmt, fmt)
    _with_keys(schema, prop, _STRING_KEYS)
    if prop.get("knownValues"):
        schema["examples"] = list(prop["knownValues"])
    return schema


def _with_keys(
    schema: dict[str, Any], prop: dict[str, Any], keys: tuple[str, ...]
) -> dict[str, Any]:
    """Copy the constraint *keys* present in *prop* onto *schema*."""
    for key in keys:
        if key in prop:
            schema[key] = prop[key]
    return schema
