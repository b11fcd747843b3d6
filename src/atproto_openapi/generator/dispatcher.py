"""Route each lexicon definition to the converter for its ``type``.

The routing table is closed over :class:`~atproto_openapi.models.DefinitionKind`:

================================================  ===========================
Kind                                              Result
================================================  ===========================
``array``, ``object``, ``record``, ``string``,    :class:`SchemaEntry` keyed by
``token``                                         the definition's identifier
``query``                                         :class:`PathEntry`, ``GET /{id}``
``procedure``                                     :class:`PathEntry`, ``POST /{id}``
``subscription``                                  :class:`NoEntry` (OpenAPI has no
                                                  streaming representation)
================================================  ===========================

Any other ``type`` raises
:class:`~atproto_openapi.exceptions.UnknownDefinitionTypeError`, which aborts
the build. Operation converters may decline a definition by returning
``None``; that yields a :class:`NoEntry` rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from atproto_openapi import converters as _converters
from atproto_openapi.exceptions import UnknownDefinitionTypeError
from atproto_openapi.lexicon.identifiers import identifier_for
from atproto_openapi.models import (
    DefinitionKind,
    DispatchResult,
    HTTPMethod,
    LexiconDefinition,
    NoEntry,
    PathEntry,
    SchemaEntry,
)

SchemaConverter = Callable[[str, str, LexiconDefinition], dict[str, Any]]
OperationConverter = Callable[[str, str, LexiconDefinition], Optional[dict[str, Any]]]


@dataclass(frozen=True)
class Converters:
    """The set of per-type converters the dispatcher calls.

    Defaults to the implementations in :mod:`atproto_openapi.converters`;
    tests substitute their own with :func:`dataclasses.replace`.
    """

    array: SchemaConverter = _converters.convert_array
    object: SchemaConverter = _converters.convert_object
    record: SchemaConverter = _converters.convert_record
    string: SchemaConverter = _converters.convert_string
    token: SchemaConverter = _converters.convert_token
    procedure: OperationConverter = _converters.convert_procedure
    query: OperationConverter = _converters.convert_query


DEFAULT_CONVERTERS = Converters()

_SCHEMA_KINDS = frozenset(
    {
        DefinitionKind.ARRAY,
        DefinitionKind.OBJECT,
        DefinitionKind.RECORD,
        DefinitionKind.STRING,
        DefinitionKind.TOKEN,
    }
)
_OPERATION_METHODS = {
    DefinitionKind.QUERY: HTTPMethod.GET,
    DefinitionKind.PROCEDURE: HTTPMethod.POST,
}
_DROPPED_KINDS = frozenset({DefinitionKind.SUBSCRIPTION})

_unrouted = set(DefinitionKind) - _SCHEMA_KINDS - set(_OPERATION_METHODS) - _DROPPED_KINDS
if _unrouted:  # pragma: no cover
    raise RuntimeError(f"Definition kinds without a route: {sorted(k.value for k in _unrouted)}")


def path_key_for(document_id: str) -> str:
    """Return the ``paths`` key an XRPC endpoint is published under."""
    return f"/{document_id}"


def dispatch(
    document_id: str,
    def_name: str,
    definition: LexiconDefinition,
    converters: Converters = DEFAULT_CONVERTERS,
) -> DispatchResult:
    """Convert one definition and describe where its output belongs.

    Args:
        document_id: Id of the lexicon the definition belongs to.
        def_name: Key of the definition in the lexicon's ``defs``.
        definition: The definition itself.
        converters: Converter bundle to use.

    Returns:
        A :class:`SchemaEntry`, :class:`PathEntry`, or :class:`NoEntry`.

    Raises:
        UnknownDefinitionTypeError: If ``definition.type`` is not a
            recognised kind (matching is case-sensitive).
    """
    identifier = identifier_for(document_id, def_name)
    try:
        kind = DefinitionKind(definition.type)
    except ValueError:
        raise UnknownDefinitionTypeError(identifier, definition.type) from None

    if kind in _SCHEMA_KINDS:
        convert: SchemaConverter = getattr(converters, kind.value)
        return SchemaEntry(identifier, convert(document_id, def_name, definition))

    if kind in _OPERATION_METHODS:
        convert_op: OperationConverter = getattr(converters, kind.value)
        operation = convert_op(document_id, def_name, definition)
        if operation is None:
            return NoEntry(identifier, f"{kind.value} is not representable")
        return PathEntry(path_key_for(document_id), _OPERATION_METHODS[kind], operation)

    return NoEntry(identifier, f"{kind.value} has no OpenAPI representation")
