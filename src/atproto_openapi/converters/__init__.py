"""Per-type converters from lexicon definitions to OpenAPI objects.

* :mod:`~atproto_openapi.converters.schemas` -- ``array``, ``object``,
  ``record``, ``string`` and ``token`` definitions become Schema Objects.
* :mod:`~atproto_openapi.converters.operations` -- ``query`` and
  ``procedure`` definitions become Operation Objects (or ``None`` when not
  representable).
* :mod:`~atproto_openapi.converters.properties` -- the field-level mapping
  both of the above build on.
"""

from atproto_openapi.converters.operations import convert_procedure, convert_query
from atproto_openapi.converters.schemas import (
    convert_array,
    convert_object,
    convert_record,
    convert_string,
    convert_token,
)

__all__ = [
    "convert_array",
    "convert_object",
    "convert_procedure",
    "convert_query",
    "convert_record",
    "convert_string",
    "convert_token",
]
