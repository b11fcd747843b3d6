"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~atproto_openapi.exceptions.AtprotoOpenAPIError`
subclass. CI scripts that regenerate the OpenAPI artifact can inspect the
exit code to tell a broken lexicon apart from a broken output path.

Example::

    $ atproto-openapi build
    $ echo $?
    3   # EXIT_MALFORMED_LEXICON -- a lexicon file could not be parsed
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_MALFORMED_LEXICON = 3
"""A lexicon file is not valid JSON or lacks its required fields."""

EXIT_UNKNOWN_DEFINITION_TYPE = 4
"""A lexicon definition declares a type that cannot be converted."""

EXIT_WRITE_ERROR = 5
"""The generated document could not be written to disk."""
