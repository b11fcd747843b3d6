"""Typer application and CLI entry point for atproto_openapi.

Commands:

* ``build`` -- convert the lexicon tree into the OpenAPI document and write
  it (or print it with ``--stdout``).
* ``inspect`` -- list every lexicon definition with its tag and whether it
  would be published, without converting anything.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Errors from the library surface as
:class:`~atproto_openapi.exceptions.AtprotoOpenAPIError` and are turned into
their exit codes; nothing is written when a build fails.

See Also:
    :mod:`atproto_openapi.config`: Build configuration resolution.
    :mod:`atproto_openapi.output`: Output formatting initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from atproto_openapi import __version__
from atproto_openapi.exceptions import AtprotoOpenAPIError, InvalidUsageError
from atproto_openapi.exit_codes import EXIT_GENERIC_FAILURE
from atproto_openapi.models import OutputFileFormat
from atproto_openapi.output import debug, error, info, print_data, print_table, success, warning


app = typer.Typer(
    name="atproto-openapi",
    help="Convert AT Protocol lexicons into an OpenAPI 3.1 document.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"atproto-openapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~atproto_openapi.output.OutputManager` and
    routes library logging through it.
    """
    from atproto_openapi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    output.configure_logging()
    set_output(output)


@app.command("build")
def build_command(
    lexicons: Optional[str] = typer.Option(
        None, "--lexicons", "-l", help="Lexicon root directory."
    ),
    output_path: Optional[str] = typer.Option(
        None, "--output", "-o", help="Where to write the OpenAPI document."
    ),
    fmt: Optional[OutputFileFormat] = typer.Option(
        None, "--format", "-f", help="Output format."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Threads for loading and converting."
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the document instead of writing it."
    ),
) -> None:
    """Generate the OpenAPI document from a lexicon tree.

    Example::

        atproto-openapi build --lexicons ./lexicons --output ./spec/api.json
    """
    from atproto_openapi.config import resolve_config
    from atproto_openapi.generator import build
    from atproto_openapi.writer import serialize_document, write_document

    try:
        if to_stdout and output_path is not None:
            raise InvalidUsageError("--stdout and --output cannot be used together")
        config = resolve_config(
            cli_lexicon_dir=lexicons,
            cli_output=output_path,
            cli_format=fmt.value if fmt is not None else None,
            cli_workers=workers,
        )
        debug(f"Reading lexicons from {config.lexicon_dir}")
        result = build(config)
        document = result.document

        if to_stdout:
            print_data(serialize_document(document, config.format))
        else:
            written = write_document(document, config.output, config.format)
            success(f"Wrote {written}")
    except AtprotoOpenAPIError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    stats = result.stats
    info(
        f"{stats.documents} lexicons: {len(document['paths'])} paths, "
        f"{len(document['components']['schemas'])} schemas, "
        f"{len(document['tags'])} tags"
    )
    if stats.skipped:
        info(f"Skipped {len(stats.skipped)} unpublished definitions")
    if stats.collisions:
        warning(f"{stats.collisions} definitions were overwritten by later lexicons")


@app.command("inspect")
def inspect_command(
    lexicons: Optional[str] = typer.Option(
        None, "--lexicons", "-l", help="Lexicon root directory."
    ),
) -> None:
    """List lexicon definitions and whether each would be published.

    Example::

        atproto-openapi inspect --lexicons ./lexicons
        atproto-openapi --json inspect
    """
    from atproto_openapi.config import resolve_config
    from atproto_openapi.lexicon import calculate_tag, discover_lexicons, identifier_for, load_lexicon

    try:
        config = resolve_config(cli_lexicon_dir=lexicons)
        rows: list[list[str]] = []
        for path in discover_lexicons(config.lexicon_dir):
            doc = load_lexicon(path)
            tag = calculate_tag(doc.id)
            for name, definition in doc.defs.items():
                identifier = identifier_for(doc.id, name)
                rows.append(
                    [identifier, _type_label(definition), tag, _status(identifier, definition)]
                )
    except AtprotoOpenAPIError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_table(
        ["Identifier", "Type", "Tag", "Status"],
        rows,
        title=f"Lexicon definitions ({len(rows)})",
    )


def _status(identifier: str, definition: Any) -> str:  # noqa: ANN401
    """Describe what a build would do with a definition."""
    from atproto_openapi.converters.operations import is_representable
    from atproto_openapi.generator.publication import exclusion_reason
    from atproto_openapi.models import DefinitionKind

    reason = exclusion_reason(identifier, definition)
    if reason is not None:
        return f"skipped ({reason})"
    try:
        kind = DefinitionKind(definition.type)
    except ValueError:
        return "unknown type"
    if kind == DefinitionKind.SUBSCRIPTION:
        return "dropped (subscription)"
    if not is_representable(kind.value, definition):
        return "dropped (no encoding)"
    return "published"


def _type_label(definition: Any) -> str:  # noqa: ANN401
    return "" if definition.type is None else str(definition.type)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``atproto-openapi`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except AtprotoOpenAPIError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
