"""atproto_openapi -- Convert AT Protocol lexicons into one OpenAPI 3.1 document.

This package reads a directory tree of AT Protocol *lexicon* schema files and
assembles the equivalent HTTP API description: every ``query`` becomes a
``GET`` operation, every ``procedure`` a ``POST``, and every named data
definition a reusable component schema.

Typical workflow::

    atproto-openapi build --lexicons ./lexicons --output ./spec/api.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models and dispatch results shared across the package.
    config: Build configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    writer: Serialisation and atomic writing of the final document.
"""

__version__ = "0.1.0"
