"""Exception hierarchy for atproto_openapi.

All exceptions inherit from :class:`AtprotoOpenAPIError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`atproto_openapi.exit_codes`. The top-level error handler in
:func:`atproto_openapi.app.main` catches ``AtprotoOpenAPIError`` and exits
with the appropriate code. Because the build is all-or-nothing, any of
these raised during a run means no artifact is written.

Subclass hierarchy::

    AtprotoOpenAPIError (exit 1)
    +-- InvalidUsageError           (exit 2)
    +-- MalformedLexiconError       (exit 3)
    +-- UnknownDefinitionTypeError  (exit 4)
    +-- OutputWriteError            (exit 5)
    +-- ConfigError                 (exit 1)
    +-- AssemblerFinalizedError     (exit 1)
"""

from __future__ import annotations

from typing import Optional

from atproto_openapi.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_LEXICON,
    EXIT_UNKNOWN_DEFINITION_TYPE,
    EXIT_WRITE_ERROR,
)


class AtprotoOpenAPIError(Exception):
    """Base exception for all atproto_openapi errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(AtprotoOpenAPIError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class MalformedLexiconError(AtprotoOpenAPIError):
    """Raised when a lexicon file is not valid JSON or lacks ``id``/``defs``.

    Args:
        message: Description of what is wrong with the file.
        path: The offending file, when known.
    """

    exit_code = EXIT_MALFORMED_LEXICON

    def __init__(self, message: str, path: Optional[str] = None):
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class UnknownDefinitionTypeError(AtprotoOpenAPIError):
    """Raised when a definition's ``type`` is not one of the recognised kinds.

    Args:
        identifier: Global identifier of the offending definition.
        type_: The unrecognised ``type`` value.
    """

    exit_code = EXIT_UNKNOWN_DEFINITION_TYPE

    def __init__(self, identifier: str, type_: object):
        super().__init__(f"Unknown type: {type_!r} (in {identifier})")
        self.identifier = identifier
        self.type = type_


class OutputWriteError(AtprotoOpenAPIError):
    """Raised when the generated document cannot be written."""

    exit_code = EXIT_WRITE_ERROR


class ConfigError(AtprotoOpenAPIError):
    """Raised for configuration problems (missing lexicon root, invalid config JSON)."""

    exit_code = EXIT_GENERIC_FAILURE


class AssemblerFinalizedError(AtprotoOpenAPIError):
    """Raised when a finalized document assembler is mutated or finalized again."""

    exit_code = EXIT_GENERIC_FAILURE
