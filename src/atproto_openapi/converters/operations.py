"""Convert lexicon ``query`` and ``procedure`` definitions into OpenAPI operations.

XRPC endpoints are exposed at ``/{nsid}``: a query is a ``GET`` with its
parameters in the query string, a procedure is a ``POST`` with an optional
request body. Both share the same response layout:

* ``200`` -- the declared output, keyed by its encoding.
* ``400`` / ``401`` -- the XRPC error envelope, whose ``error`` enum lists
  the generic XRPC errors plus those the definition declares.

An operation whose ``input`` or ``output`` declares no ``encoding`` cannot be
keyed by media type; the converters return ``None`` for it and the pipeline
leaves the path out.
"""

from __future__ import annotations

from typing import Any, Optional

from atproto_openapi.converters.properties import convert_property
from atproto_openapi.lexicon.identifiers import calculate_tag
from atproto_openapi.models import LexiconDefinition

SECURITY_SCHEME = "Bearer"

_GENERIC_ERRORS = ("InvalidRequest", "ExpiredToken", "InvalidToken")
_ERROR_RESPONSES = (("400", "Bad Request"), ("401", "Unauthorized"))
_BODIES = {"query": ("output",), "procedure": ("input", "output")}


def convert_query(
    document_id: str, def_name: str, definition: LexiconDefinition
) -> Optional[dict[str, Any]]:
    """Convert a ``query`` definition into a ``GET`` Operation Object.

    Returns:
        The operation, or ``None`` when its output has no encoding.
    """
    if not is_representable("query", definition):
        return None
    output = definition.get("output")

    operation = _base_operation(document_id, definition)
    parameters = _convert_parameters(document_id, definition.get("parameters"))
    if parameters:
        operation["parameters"] = parameters
    operation["responses"] = _convert_responses(document_id, definition, output)
    return operation


def convert_procedure(
    document_id: str, def_name: str, definition: LexiconDefinition
) -> Optional[dict[str, Any]]:
    """Convert a ``procedure`` definition into a ``POST`` Operation Object.

    Returns:
        The operation, or ``None`` when its input or output has no encoding.
    """
    if not is_representable("procedure", definition):
        return None
    body = definition.get("input")
    output = definition.get("output")

    operation = _base_operation(document_id, definition)
    parameters = _convert_parameters(document_id, definition.get("parameters"))
    if parameters:
        operation["parameters"] = parameters
    if body is not None:
        operation["requestBody"] = {
            "required": True,
            "content": _convert_body(document_id, body),
        }
    operation["responses"] = _convert_responses(document_id, definition, output)
    return operation


def is_representable(kind: str, definition: LexiconDefinition) -> bool:
    """Whether every body an operation of *kind* carries names its encoding.

    Queries only carry an ``output``; procedures carry ``input`` and ``output``.
    """
    return all(_has_encoding(definition.get(body)) for body in _BODIES.get(kind, ()))


def _has_encoding(body: Optional[dict[str, Any]]) -> bool:
    """A missing body is fine; a declared body must name its encoding."""
    return body is None or bool(body.get("encoding"))


def _base_operation(document_id: str, definition: LexiconDefinition) -> dict[str, Any]:
    operation: dict[str, Any] = {"operationId": document_id}
    if definition.description:
        operation["description"] = definition.description
    operation["tags"] = [calculate_tag(document_id)]
    operation["security"] = [{SECURITY_SCHEME: []}]
    return operation


def _convert_parameters(
    document_id: str, params: Optional[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Turn a lexicon ``params`` block into ``in: query`` Parameter Objects."""
    if not params:
        return []

    required = set(params.get("required", []))
    parameters: list[dict[str, Any]] = []
    for name, prop in params.get("properties", {}).items():
        parameter: dict[str, Any] = {"name": name, "in": "query"}
        if prop.get("description"):
            parameter["description"] = prop["description"]
        parameter["required"] = name in required
        schema = convert_property(document_id, prop)
        schema.pop("description", None)
        parameter["schema"] = schema
        parameters.append(parameter)
    return parameters


def _convert_body(document_id: str, body: dict[str, Any]) -> dict[str, Any]:
    """Return a Content map for an XRPC ``input``/``output`` block."""
    media: dict[str, Any] = {}
    if body.get("schema"):
        media["schema"] = convert_property(document_id, body["schema"])
    return {body["encoding"]: media}


def _convert_responses(
    document_id: str,
    definition: LexiconDefinition,
    output: Optional[dict[str, Any]],
) -> dict[str, Any]:
    ok: dict[str, Any] = {"description": "OK"}
    if output is not None:
        ok["content"] = _convert_body(document_id, output)

    responses: dict[str, Any] = {"200": ok}
    declared = definition.get("errors", [])
    for status, description in _ERROR_RESPONSES:
        responses[status] = {
            "description": description,
            "content": {"application/json": {"schema": _error_schema(declared)}},
        }
    return responses


def _error_schema(declared: list[dict[str, Any]]) -> dict[str, Any]:
    """Build the XRPC error envelope with every error name the endpoint can return."""
    names = list(_GENERIC_ERRORS)
    for err in declared:
        name = err.get("name")
        if name and name not in names:
            names.append(name)
    return {
        "type": "object",
        "required": ["error", "message"],
        "properties": {
            "error": {"type": "string", "enum": names},
            "message": {"type": "string"},
        },
    }
