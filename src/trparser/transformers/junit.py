"""JUnit XML transformer.

This module converts JUnit-style XML, as written by:
- JUnit / Surefire (Java)
- pytest (--junitxml)
- Jest (jest-junit), WebdriverIO, Mocha reporters
- Many other test frameworks

Counting follows the JUnit convention that skipped tests are not part of
the denominator: ``total = tests - skipped`` and
``passed = total - failures - errors``.
"""

from __future__ import annotations

import re
from typing import Any

from trparser.core.aggregation import Totals, resolve_duration, resolve_totals
from trparser.core.durations import read_count, read_number, read_seconds, seconds_to_ms
from trparser.core.exceptions import FormatError
from trparser.core.metadata import resolve_metadata
from trparser.core.models import Status, TestAttachment, TestCase, TestResult, TestSuite
from trparser.core.status import derive_status
from trparser.logging import get_logger

from .base import ParseOptions, ReportTransformer
from .nodes import attr, child_text, children, first, pairs, text

logger = get_logger(__name__)

# [[ATTACHMENT|/absolute/path/to/file.png]] as emitted by the Jenkins attachments plugin
ATTACHMENT_PATTERN = re.compile(r"\[\[ATTACHMENT\|([^\]]+)\]\]")


def extract_attachments(output: str | None) -> tuple[TestAttachment, ...]:
    """Find attachment markers in captured console output."""
    if not output:
        return ()
    attachments = []
    pos = 0
    while pos <= len(output):
        match = ATTACHMENT_PATTERN.search(output, pos)
        if match is None:
            break
        # A zero-width match would leave the cursor in place forever
        pos = match.end() if match.end() > match.start() else match.end() + 1
        path = match.group(1).strip()
        if path:
            attachments.append(TestAttachment(path=path))
    return tuple(attachments)


def declared_totals(raw: Any, options: ParseOptions) -> Totals | None:
    """Read the counters a <testsuites>/<testsuite> element declares.

    Returns None when ``tests`` or ``failures`` is absent or unparseable.
    """
    tests = read_count(attr(raw, "tests"))
    failures = read_count(attr(raw, "failures"))
    if tests is None or failures is None:
        return None
    skipped = read_count(attr(raw, "skipped")) or 0
    errors = 0 if options.ignore_error_count else read_count(attr(raw, "errors")) or 0
    total = tests - skipped
    return Totals(
        total=total,
        passed=total - failures - errors,
        failed=failures,
        errors=errors,
        skipped=0,
    )


class JUnitTransformer(ReportTransformer):
    """Transformer for JUnit XML reports."""

    source_format = "xml"

    @property
    def name(self) -> str:
        """Return the report type."""
        return "junit"

    def transform(self, document: Any, options: ParseOptions) -> TestResult:
        """Convert a deserialized JUnit document to a TestResult."""
        if not isinstance(document, dict):
            raise FormatError("JUnit document must be an XML element mapping")

        # Handle both <testsuites> and <testsuite> as root
        if "testsuites" in document:
            raw_result = first(document, "testsuites")
            raw_suites = [s for s in children(raw_result, "testsuite") if children(s, "testcase")]
        elif "testsuite" in document:
            raw_result = first(document, "testsuite")
            raw_suites = [raw_result]
        else:
            raise FormatError("JUnit document has neither a <testsuites> nor a <testsuite> root")

        suites = tuple(self._build_suite(raw, options) for raw in raw_suites)
        totals = resolve_totals(declared_totals(raw_result, options), suites)
        declared_time = read_seconds(attr(raw_result, "time"))
        duration = resolve_duration(
            seconds_to_ms(declared_time) if declared_time is not None else None, suites
        )

        return TestResult(
            name=attr(raw_result, "name") or "",
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=duration,
            suites=suites,
        )

    def _build_suite(self, raw: Any, options: ParseOptions) -> TestSuite:
        """Build a suite from a <testsuite> element."""
        name = attr(raw, "name") or ""
        own = pairs(raw, "properties", "property")
        hostname = attr(raw, "hostname")
        if hostname:
            own.append(("hostname", hostname))
        metadata = resolve_metadata(None, own)

        raw_cases = children(raw, "testcase")
        cases = tuple(self._build_case(raw_case, metadata) for raw_case in raw_cases)

        totals = declared_totals(raw, options)
        if totals is None:
            logger.debug("junit_suite_counts_rebuilt", suite=name)
            totals = self._count_cases(raw_cases, cases, options)

        declared_time = read_seconds(attr(raw, "time"))
        if declared_time is not None:
            duration = seconds_to_ms(declared_time)
        else:
            duration = sum((case.duration_ms for case in cases), 0.0)

        return TestSuite(
            name=name,
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=duration,
            metadata=metadata,
            cases=cases,
        )

    @staticmethod
    def _count_cases(raw_cases: list[Any], cases: tuple[TestCase, ...], options: ParseOptions) -> Totals:
        """Count suite outcomes from its cases when the suite declares none."""
        passed = failed = errors = 0
        for raw_case, case in zip(raw_cases, cases):
            if children(raw_case, "skipped"):
                continue
            if case.status is Status.FAIL:
                failed += 1
            elif children(raw_case, "error") and not options.ignore_error_count:
                errors += 1
            else:
                passed += 1
        return Totals.from_counts(passed=passed, failed=failed, errors=errors, skipped=0)

    @staticmethod
    def _build_case(raw: Any, suite_metadata: dict[str, str]) -> TestCase:
        """Build a case from a <testcase> element."""
        seconds = read_number(attr(raw, "time"), "testcase.time", default=0.0)
        metadata = resolve_metadata(suite_metadata, pairs(raw, "properties", "property"))
        attachments = extract_attachments(child_text(raw, "system-out"))

        failures = children(raw, "failure")
        if not failures:
            return TestCase(
                name=attr(raw, "name") or "",
                status=Status.PASS,
                duration_ms=seconds_to_ms(seconds),
                metadata=metadata,
                attachments=attachments,
            )

        message = attr(failures[0], "message")
        if not message:
            # WebdriverIO puts the message on <error> next to an empty <failure>
            error = first(raw, "error")
            message = attr(error, "message") if error is not None else None
        stack_trace = child_text(raw, "system-err") or text(failures[0])

        return TestCase(
            name=attr(raw, "name") or "",
            status=Status.FAIL,
            duration_ms=seconds_to_ms(seconds),
            failure=message or None,
            stack_trace=stack_trace,
            metadata=metadata,
            attachments=attachments,
        )
