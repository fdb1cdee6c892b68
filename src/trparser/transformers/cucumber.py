"""Cucumber JSON transformer.

Cucumber reports carry no counters at all, only features, scenarios and
steps. Statistics are therefore computed in two passes: first every
scenario is folded from its steps, then every feature from its scenarios.
"""

from __future__ import annotations

from typing import Any

from trparser.core.aggregation import Totals, resolve_duration, resolve_totals
from trparser.core.durations import nanoseconds_to_ms, read_number
from trparser.core.exceptions import FormatError
from trparser.core.metadata import resolve_metadata
from trparser.core.models import Status, TestCase, TestResult, TestSuite
from trparser.core.status import derive_status

from .base import ParseOptions, ReportTransformer

# First frame of a JavaScript/Java stack trace inside an error message
STACK_FRAME_MARKER = "    at "

PASSED = "passed"
FAILED = "failed"


def split_failure(message: str | None) -> tuple[str | None, str | None]:
    """Split an error message into (summary, stack trace).

    The stack trace starts at the first stack frame marker. A marker at the
    very start yields an empty summary; no marker yields no stack trace.
    """
    if not message:
        return None, None
    index = message.find(STACK_FRAME_MARKER)
    if index == -1:
        return message, None
    return message[:index], message[index:]


def tag_metadata(tags: list[dict[str, Any]] | None) -> dict[str, str]:
    """Turn Cucumber tags into metadata.

    ``@key=value`` sets ``key``; bare tags are collected under ``tags``
    (without the ``@``) and ``tagsRaw`` (as written).
    """
    metadata: dict[str, str] = {}
    names: list[str] = []
    raw_names: list[str] = []
    for tag in tags or []:
        raw = str(tag.get("name", ""))
        if not raw:
            continue
        key, _, value = raw.removeprefix("@").partition("=")
        if value:
            metadata[key] = value
        else:
            names.append(key)
            raw_names.append(raw)
    if names:
        metadata["tags"] = ",".join(names)
        metadata["tagsRaw"] = ",".join(raw_names)
    return metadata


class CucumberTransformer(ReportTransformer):
    """Transformer for Cucumber JSON reports."""

    source_format = "json"

    @property
    def name(self) -> str:
        """Return the report type."""
        return "cucumber"

    def transform(self, document: Any, options: ParseOptions) -> TestResult:
        """Convert a deserialized Cucumber document to a TestResult."""
        if not isinstance(document, list):
            raise FormatError("Cucumber document must be a list of features")

        suites = []
        for feature in document:
            if not isinstance(feature, dict):
                raise FormatError("Cucumber feature must be an object")
            suites.append(self._build_suite(feature))
        suites = tuple(suites)

        # Cucumber declares no totals, everything is rolled up from features
        totals = resolve_totals(None, suites)
        return TestResult(
            name="",
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=resolve_duration(None, suites),
            suites=suites,
        )

    def _build_suite(self, feature: dict[str, Any]) -> TestSuite:
        """Build a suite from a feature and its scenarios."""
        cases = tuple(self._build_case(scenario) for scenario in feature.get("elements") or [])
        passed = sum(1 for case in cases if case.status is Status.PASS)
        totals = Totals.from_counts(passed=passed, failed=len(cases) - passed, errors=0, skipped=0)

        metadata = tag_metadata(feature.get("tags"))
        if feature.get("uri"):
            metadata = resolve_metadata(metadata, {"uri": str(feature["uri"])})

        return TestSuite(
            name=feature.get("name") or "",
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=sum((case.duration_ms for case in cases), 0.0),
            metadata=metadata,
            cases=cases,
        )

    @staticmethod
    def _build_case(scenario: dict[str, Any]) -> TestCase:
        """Build a case from a scenario and its steps."""
        steps = scenario.get("steps") or []
        results = [step.get("result") or {} for step in steps]

        nanoseconds = sum(
            read_number(result.get("duration"), "step.result.duration", default=0.0)
            for result in results
        )
        status = Status.PASS if all(r.get("status") == PASSED for r in results) else Status.FAIL
        message = next(
            (r.get("error_message") for r in results if r.get("status") == FAILED),
            None,
        )
        failure, stack_trace = split_failure(message)

        return TestCase(
            name=scenario.get("name") or "",
            status=status,
            duration_ms=nanoseconds_to_ms(nanoseconds),
            failure=failure,
            stack_trace=stack_trace,
            metadata=tag_metadata(scenario.get("tags")),
        )
