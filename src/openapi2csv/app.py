"""Typer CLI entry point for openapi2csv.

The CLI is a thin shell around :func:`~openapi2csv.pipeline.convert_spec`:
it collects options (flags, then ``OPENAPI2CSV_*`` environment variables,
then defaults), validates them with :func:`~openapi2csv.config.build_config`,
runs the conversion once, and maps failures to exit codes.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from openapi2csv import __version__
from openapi2csv.config import ENV_PREFIX
from openapi2csv.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="openapi2csv",
    help="Convert an OpenAPI specification to CSV for RAG systems.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openapi2csv {__version__}")
        raise typer.Exit()


@app.command()
def convert(
    input: str = typer.Option(
        "./spec.json", "--input", "-i",
        envvar=f"{ENV_PREFIX}INPUT",
        help="Input OpenAPI spec: file path, http(s) URL, or '-' for stdin.",
    ),
    output: str = typer.Option(
        "./output", "--output", "-o",
        envvar=f"{ENV_PREFIX}OUTPUT",
        help="Output directory for api_spec.csv.",
    ),
    input_format: str = typer.Option(
        "json", "--format", "-f",
        envvar=f"{ENV_PREFIX}FORMAT",
        help="Input format type (json/yaml).",
    ),
    output_mode: str = typer.Option(
        "default", "--output-format",
        envvar=f"{ENV_PREFIX}OUTPUT_FORMAT",
        help="Output format type (default/rag).",
    ),
    batch_size: int = typer.Option(
        100, "--batch-size", "-b",
        envvar=f"{ENV_PREFIX}BATCH_SIZE",
        help="Number of endpoints to process per batch.",
    ),
    delimiter: str = typer.Option(
        ";", "--delimiter", "-d",
        envvar=f"{ENV_PREFIX}DELIMITER",
        help="CSV delimiter character.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print the result as JSON on stdout."
    ),
    version: bool = typer.Option(
        False, "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Convert an OpenAPI spec into api_spec.csv.

    Writes one row per operation. ``default`` output has 11 columns per
    row; ``rag`` output has the five code/metadata columns.

    Example::

        openapi2csv -i petstore.yaml -f yaml -o ./out --output-format rag
    """
    from openapi2csv.config import build_config
    from openapi2csv.exceptions import Openapi2CsvError
    from openapi2csv.output import (
        OutputManager,
        error,
        info,
        print_result,
        print_traceback,
        set_output,
        success,
    )
    from openapi2csv.pipeline import convert_spec

    set_output(
        OutputManager(
            json_output=json_output,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )

    try:
        config = build_config(
            input=input,
            output=output,
            input_format=input_format,
            output_mode=output_mode,
            batch_size=batch_size,
            delimiter=delimiter,
            verbose=verbose,
        )
        result = convert_spec(config)
    except Openapi2CsvError as exc:
        error(str(exc))
        print_traceback()
        raise typer.Exit(code=exc.exit_code) from None
    except OSError as exc:
        error(str(exc))
        print_traceback()
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None

    success(f"Converted {result.total_endpoints} endpoints")
    info(f"Output file: {result.output_file}")
    print_result(result)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``openapi2csv`` console script.

    Known errors are reported by the command itself.  Anything else is
    reported as an unexpected error with a generic failure exit.

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
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from openapi2csv.output import error, print_traceback

        error(f"Unexpected error: {exc}")
        print_traceback()
        sys.exit(EXIT_GENERIC_FAILURE)
