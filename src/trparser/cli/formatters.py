"""Output formatters for the trparser CLI."""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from trparser.core.models import Status, TestResult

STATUS_STYLES = {
    Status.PASS: "green",
    Status.FAIL: "red",
    Status.ERROR: "red",
    Status.SKIP: "yellow",
}


def format_json(result: TestResult) -> str:
    """Format a result as indented JSON."""
    return json.dumps(result.to_dict(), indent=2)


def format_duration(duration_ms: float) -> str:
    """Format a duration for display (e.g., 1523.4 -> '1.52s')."""
    if duration_ms >= 1000:
        return f"{duration_ms / 1000:.2f}s"
    return f"{duration_ms:.0f}ms"


def build_table(result: TestResult) -> Table:
    """Build a per-suite table for a result."""
    table = Table(title=escape(result.name) if result.name else None)
    table.add_column("Suite")
    table.add_column("Status")
    for column in ("Total", "Passed", "Failed", "Errors", "Skipped", "Duration"):
        table.add_column(column, justify="right")

    for suite in result.suites:
        style = STATUS_STYLES[suite.status]
        table.add_row(
            escape(suite.name),
            f"[{style}]{suite.status.value}[/{style}]",
            str(suite.total),
            str(suite.passed),
            str(suite.failed),
            str(suite.errors),
            str(suite.skipped),
            format_duration(suite.duration_ms),
        )
    return table


def print_text(result: TestResult, console: Console | None = None) -> None:
    """Print a suite table followed by a one-line summary."""
    console = console or Console(highlight=False)
    console.print(build_table(result))
    style = STATUS_STYLES[result.status]
    console.print(
        f"[{style}]{result.status.value}[/{style}] "
        f"{result.total} total, {result.passed} passed, {result.failed} failed, "
        f"{result.errors} errors, {result.skipped} skipped "
        f"in {format_duration(result.duration_ms)}"
    )
