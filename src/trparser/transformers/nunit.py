"""NUnit XML transformer (NUnit 2 ``<test-results>`` and NUnit 3 ``<test-run>``).

NUnit nests suites deeply (assembly, namespaces, fixtures, parameterized
methods). Canonical suites are the fixtures; the suites above a fixture
only contribute inherited metadata, the suites below it only contribute
their cases.

Metadata inheritance:
- The root element and the assembly seed it with environment, settings
  and properties.
- Every suite on the way down overlays its own properties and categories.
- Every case overlays its own properties and categories last.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from trparser.core.aggregation import Totals, resolve_duration, resolve_totals
from trparser.core.durations import read_number, read_seconds, seconds_to_ms
from trparser.core.exceptions import FormatError
from trparser.core.metadata import merge_csv, resolve_metadata
from trparser.core.models import Status, TestAttachment, TestCase, TestResult, TestSuite
from trparser.core.status import derive_status
from trparser.logging import get_logger

from .base import ParseOptions, ReportTransformer
from .nodes import attr, child_text, children, first, pairs

logger = get_logger(__name__)

FIXTURE_TYPE = "TestFixture"
CATEGORY_PROPERTY = "Category"
CATEGORIES_KEY = "Categories"

# NUnit 2 outcome vocabulary -> canonical case status
OUTCOME_STATUS: MappingProxyType[str, Status] = MappingProxyType(
    {
        "Success": Status.PASS,
        "Failure": Status.FAIL,
        "Error": Status.ERROR,
        "Inconclusive": Status.FAIL,
        "Ignored": Status.SKIP,
        "NotRunnable": Status.SKIP,
        "Invalid": Status.SKIP,
        "Skipped": Status.SKIP,
        "Explicit": Status.SKIP,
        "Cancelled": Status.FAIL,
        "Warning": Status.PASS,
    }
)


def case_outcome(raw: Any) -> str | None:
    """Normalize NUnit 2 ``result`` and NUnit 3 ``result``/``label`` to one outcome."""
    result = attr(raw, "result")
    label = attr(raw, "label")
    if result == "Passed":
        return "Success"
    if result == "Failed":
        return label if label in ("Error", "Invalid", "Cancelled") else "Failure"
    if result == "Skipped":
        return label if label in ("Ignored", "Explicit") else "Skipped"
    if result is None:
        # NUnit 2.2 only wrote executed/success flags
        if attr(raw, "executed") == "False":
            return "NotRunnable"
        success = attr(raw, "success")
        if success is not None:
            return "Success" if success == "True" else "Failure"
    return result


def nested(node: Any, tag: str) -> list[Any]:
    """Children named ``tag``, whether direct (NUnit 3) or under <results> (NUnit 2)."""
    found = list(children(node, tag))
    for results in children(node, "results"):
        found.extend(children(results, tag))
    return found


def own_metadata(raw: Any, inherited: Mapping[str, str]) -> list[tuple[str, str]]:
    """Collect the metadata pairs an element declares itself."""
    own: list[tuple[str, str]] = []

    for environment in children(raw, "environment"):
        if isinstance(environment, dict):
            values = [f"{k[1:]}={v}" for k, v in environment.items() if k.startswith("@")]
            own.append(("environment", ",".join(values)))
    own.extend(pairs(raw, "settings", "setting"))

    description = attr(raw, "description")
    if description:
        own.append(("Description", description))

    categories = [attr(c, "name") for group in children(raw, "categories") for c in children(group, "category")]
    for name, value in pairs(raw, "properties", "property"):
        if name == CATEGORY_PROPERTY:
            categories.append(value)
        else:
            own.append((name, value))

    categories = [c for c in categories if c]
    if categories:
        own.extend((category, "") for category in categories)
        own.append((CATEGORIES_KEY, merge_csv(inherited.get(CATEGORIES_KEY), categories)))
    return own


class NUnitTransformer(ReportTransformer):
    """Transformer for NUnit 2 and NUnit 3 XML reports."""

    source_format = "xml"

    @property
    def name(self) -> str:
        """Return the report type."""
        return "nunit"

    def transform(self, document: Any, options: ParseOptions) -> TestResult:
        """Convert a deserialized NUnit document to a TestResult."""
        if isinstance(document, dict) and "test-run" in document:
            root, version = children(document, "test-run")[0], 3
        elif isinstance(document, dict) and "test-results" in document:
            root, version = children(document, "test-results")[0], 2
        else:
            raise FormatError("NUnit document has neither a <test-run> nor a <test-results> root")

        logger.debug("nunit_document_read", version=version)
        root_metadata = resolve_metadata(None, own_metadata(root, {}))

        suites: list[TestSuite] = []
        for raw_suite in nested(root, "test-suite"):
            self._walk(raw_suite, root_metadata, suites, options)

        totals = resolve_totals(None, suites)
        return TestResult(
            name=attr(root, "name") or "",
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=resolve_duration(self._declared_duration(root, version), suites),
            suites=tuple(suites),
        )

    @staticmethod
    def _declared_duration(root: Any, version: int) -> float | None:
        """Run duration in ms as declared by the document, if any."""
        if version == 3:
            seconds = read_seconds(attr(root, "duration"))
            return seconds_to_ms(seconds) if seconds is not None else None
        # NUnit 2 root "time" is a wall clock time, not a duration
        times = [read_seconds(attr(s, "time")) for s in nested(root, "test-suite")]
        if not times or any(t is None for t in times):
            return None
        return seconds_to_ms(sum(times))

    def _walk(self, raw: Any, inherited: dict[str, str], suites: list[TestSuite], options: ParseOptions) -> None:
        """Descend through container suites until fixtures are found."""
        metadata = resolve_metadata(inherited, own_metadata(raw, inherited))
        if attr(raw, "type") == FIXTURE_TYPE or nested(raw, "test-case"):
            suites.append(self._build_suite(raw, metadata, options))
            return
        for child in nested(raw, "test-suite"):
            self._walk(child, metadata, suites, options)

    def _build_suite(self, raw: Any, metadata: dict[str, str], options: ParseOptions) -> TestSuite:
        """Build a suite from a fixture and every case below it."""
        cases: list[TestCase] = []
        self._collect_cases(raw, metadata, cases)

        counts = {status: 0 for status in Status}
        for case in cases:
            counts[case.status] += 1
        errors = counts[Status.ERROR]
        failed = counts[Status.FAIL]
        if options.ignore_error_count:
            failed, errors = failed + errors, 0
        totals = Totals.from_counts(
            passed=counts[Status.PASS], failed=failed, errors=errors, skipped=counts[Status.SKIP]
        )

        seconds = read_seconds(attr(raw, "duration") or attr(raw, "time"))
        if seconds is not None:
            duration = seconds_to_ms(seconds)
        else:
            duration = sum((case.duration_ms for case in cases), 0.0)

        return TestSuite(
            name=attr(raw, "fullname") or attr(raw, "name") or "",
            status=derive_status(totals.total, totals.passed, totals.skipped),
            total=totals.total,
            passed=totals.passed,
            failed=totals.failed,
            errors=totals.errors,
            skipped=totals.skipped,
            duration_ms=duration,
            metadata=metadata,
            cases=tuple(cases),
        )

    def _collect_cases(self, raw: Any, metadata: dict[str, str], cases: list[TestCase]) -> None:
        """Append the cases of a suite, flattening parameterized sub-suites."""
        for raw_case in nested(raw, "test-case"):
            cases.append(self._build_case(raw_case, metadata))
        for child in nested(raw, "test-suite"):
            self._collect_cases(child, resolve_metadata(metadata, own_metadata(child, metadata)), cases)

    @staticmethod
    def _build_case(raw: Any, inherited: dict[str, str]) -> TestCase:
        """Build a case from a <test-case> element."""
        outcome = case_outcome(raw)
        status = OUTCOME_STATUS.get(outcome) if outcome else None
        if status is None:
            raise FormatError(f"Unknown NUnit outcome {outcome!r} for test case {attr(raw, 'name')!r}")

        seconds = read_number(attr(raw, "duration") or attr(raw, "time"), "test-case.duration", default=0.0)

        # Inconclusive, ignored and invalid tests explain themselves in <reason>
        failure_block = first(raw, "failure")
        failure = child_text(failure_block, "message") or child_text(first(raw, "reason"), "message")
        stack_trace = child_text(failure_block, "stack-trace")

        attachments = []
        for group in children(raw, "attachments"):
            for entry in children(group, "attachment"):
                path = (child_text(entry, "filePath") or "").strip()
                if path:
                    attachments.append(TestAttachment(path=path, name=child_text(entry, "description")))

        return TestCase(
            name=attr(raw, "fullname") or attr(raw, "name") or "",
            status=status,
            duration_ms=seconds_to_ms(seconds),
            failure=failure.strip() if failure else None,
            stack_trace=stack_trace.strip() if stack_trace else None,
            metadata=resolve_metadata(inherited, own_metadata(raw, inherited)),
            attachments=tuple(attachments),
        )
