#!/usr/bin/env python3
"""
CLI for validating YAML/JSON documents against docschema schemas.

Usage:
    docschema validate article.json article.schema.yaml
    docschema validate order.yaml order.schema.json --cast --cast-source --show-document
    docschema validate payload.json schema.json --query "data.items[0]" --format json
    docschema formats
    docschema --version

Exit codes:
    0  document is valid
    1  document is invalid (or stopped by --fail-on-first-error)
    2  document or schema could not be loaded or interpreted
"""

import json
import logging
import re
from enum import Enum
from typing import Any, Optional

import jmespath
import typer
from jmespath.exceptions import JMESPathError

from docschema import __version__
from docschema.exceptions import SchemaError, ValidatorError
from docschema.loader import load_documents
from docschema.registry import default_registry
from docschema.validation import validate

app = typer.Typer(
    name="docschema",
    help="docschema - validate JSON/YAML documents against declarative schemas",
    no_args_is_help=True,
    add_completion=False,
)

EXIT_INVALID = 1
EXIT_LOAD_ERROR = 2


class OutputFormat(str, Enum):
    """Output format for validation reports."""
    text = "text"
    json = "json"


def setup_logging(verbose: int, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


@app.command(name="validate")
def validate_command(
    document: str = typer.Argument(..., help="Document path or fsspec URI (YAML or JSON)"),
    schema: str = typer.Argument(..., help="Schema path or fsspec URI (YAML or JSON)"),
    cast: bool = typer.Option(False, "--cast", help="Coerce values to the declared type"),
    cast_source: bool = typer.Option(False, "--cast-source", help="Write coerced values back into the document"),
    apply_defaults: bool = typer.Option(False, "--apply-defaults", help="Fill absent properties from schema defaults"),
    validate_defaults: bool = typer.Option(False, "--validate-defaults", help="Check schema defaults against their schema"),
    no_formats: bool = typer.Option(False, "--no-formats", help="Skip format checks"),
    strict_formats: bool = typer.Option(False, "--strict-formats", help="Treat unknown formats as errors"),
    no_format_extensions: bool = typer.Option(False, "--no-format-extensions", help="Ignore extension formats (url)"),
    no_additional_properties: bool = typer.Option(
        False, "--no-additional-properties", help="Reject undeclared properties by default"
    ),
    exit_on_first_error: bool = typer.Option(False, "--exit-on-first-error", help="Report only the first error"),
    fail_on_first_error: bool = typer.Option(False, "--fail-on-first-error", help="Abort on the first error"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="JMESPath expression selecting what to validate"),
    output_format: OutputFormat = typer.Option(OutputFormat.text, "--format", "-f", help="Report format"),
    show_document: bool = typer.Option(False, "--show-document", help="Print the (possibly modified) document"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
    quiet: bool = typer.Option(False, "--quiet", help="Only log errors"),
):
    """
    Validate DOCUMENT against SCHEMA.
    """
    setup_logging(verbose, quiet)

    try:
        data, schema_data = load_documents(document, schema)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_LOAD_ERROR)
    except (OSError, ValueError, ImportError) as e:
        typer.echo(f"Error: Failed to load input: {e}", err=True)
        raise typer.Exit(EXIT_LOAD_ERROR)

    target = data
    if query:
        try:
            target = jmespath.search(query, data)
        except JMESPathError as e:
            typer.echo(f"Error: Invalid --query expression: {e}", err=True)
            raise typer.Exit(EXIT_LOAD_ERROR)
        if target is None:
            typer.echo(f"Error: --query matched nothing: {query}", err=True)
            raise typer.Exit(EXIT_LOAD_ERROR)

    options = {
        "cast": cast,
        "cast_source": cast_source,
        "apply_default_value": apply_defaults,
        "validate_default_value": validate_defaults,
        "validate_formats": not no_formats,
        "validate_formats_strict": strict_formats,
        "validate_format_extensions": not no_format_extensions,
        "exit_on_first_error": exit_on_first_error,
        "fail_on_first_error": fail_on_first_error,
    }
    if no_additional_properties:
        options["additional_properties"] = False

    try:
        result = validate(target, schema_data, options)
    except ValidatorError as e:
        if output_format == OutputFormat.json:
            typer.echo(_dump({"valid": False, "aborted": e.to_dict()}))
        else:
            typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(EXIT_INVALID)
    except (SchemaError, re.error) as e:
        typer.echo(f"Error: Invalid schema: {e}", err=True)
        raise typer.Exit(EXIT_LOAD_ERROR)

    if output_format == OutputFormat.json:
        report = result.to_dict()
        if show_document:
            report["document"] = data
        typer.echo(_dump(report))
    else:
        if result.valid:
            typer.echo(f"{document}: valid")
        else:
            typer.echo(f"{document}: {len(result.errors)} error(s)")
            for error in result.errors:
                typer.echo(f"  - {error.property}: {error.message} [{error.attribute}]")
        if show_document:
            typer.echo(_dump(data))

    if not result.valid:
        raise typer.Exit(EXIT_INVALID)


@app.command()
def formats():
    """
    List registered formats.
    """
    for name in sorted(default_registry.formats):
        typer.echo(name)
    for name in sorted(default_registry.format_extensions):
        typer.echo(f"{name} (extension)")


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"docschema {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """docschema - validate JSON/YAML documents against declarative schemas."""


def main():
    """Entry point for the docschema CLI."""
    app()


if __name__ == "__main__":
    main()
