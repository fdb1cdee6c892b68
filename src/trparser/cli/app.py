"""Main Typer CLI application for trparser."""

from __future__ import annotations

import asyncio
import re
from typing import Annotated

import typer

from trparser.cli import formatters
from trparser.config import get_settings
from trparser.core.exceptions import ParserError
from trparser.logging import configure_logging
from trparser.parser import parse, parse_from_url
from trparser.transformers import ParseOptions, ReportType

app = typer.Typer(
    name="trparser",
    help="Convert JUnit, NUnit and Cucumber reports into one result model",
    no_args_is_help=True,
)

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def is_url(target: str) -> bool:
    """Check if target is an HTTP(S) URL rather than a local path."""
    return bool(URL_PATTERN.match(target))


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log debug information to stderr"),
    ] = False,
) -> None:
    """Configure logging for every command."""
    settings = get_settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json_format,
    )


@app.command("parse")
def parse_command(
    target: Annotated[
        str,
        typer.Argument(help="Path to a report file OR an http(s) URL"),
    ],
    report_type: Annotated[
        ReportType,
        typer.Option(
            "-t",
            "--type",
            help="Report format",
            case_sensitive=False,
        ),
    ],
    ignore_error_count: Annotated[
        bool,
        typer.Option(
            "--ignore-error-count",
            help="Do not propagate the source 'errors' count",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "-f",
            "--output-format",
            help="Output format (text, json)",
        ),
    ] = "text",
) -> None:
    """Parse a test report and print the canonical result."""
    if output_format not in ("text", "json"):
        typer.echo(f"Error: unknown output format {output_format!r}", err=True)
        raise typer.Exit(code=2)

    options = ParseOptions(
        type=report_type,
        ignore_error_count=ignore_error_count or get_settings().ignore_error_count,
    )
    try:
        if is_url(target):
            result = asyncio.run(parse_from_url(target, options))
        else:
            result = parse(target, options)
    except (ParserError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if output_format == "json":
        typer.echo(formatters.format_json(result))
    else:
        formatters.print_text(result)
