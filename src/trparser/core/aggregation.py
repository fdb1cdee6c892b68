"""Rollup of suite counters into result counters.

Source documents usually declare their own totals. Declared totals that
parse are authoritative and are kept as-is, even when they disagree with
the sum of the children. Only when they are absent or unparseable are the
totals recomputed from the suites.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from trparser.logging import get_logger

from .models import TestSuite

logger = get_logger(__name__)


@dataclass(frozen=True)
class Totals:
    """Counters shared by suites and results."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    skipped: int = 0

    @classmethod
    def from_counts(cls, *, passed: int, failed: int, errors: int, skipped: int) -> Totals:
        """Build totals whose ``total`` is the sum of the four outcomes."""
        return cls(
            total=passed + failed + errors + skipped,
            passed=passed,
            failed=failed,
            errors=errors,
            skipped=skipped,
        )


def sum_suites(suites: Iterable[TestSuite]) -> Totals:
    """Sum the counters of the given suites."""
    total = passed = failed = errors = skipped = 0
    for suite in suites:
        total += suite.total
        passed += suite.passed
        failed += suite.failed
        errors += suite.errors
        skipped += suite.skipped
    return Totals(total=total, passed=passed, failed=failed, errors=errors, skipped=skipped)


def sum_durations(suites: Iterable[TestSuite]) -> float:
    """Sum the durations of the given suites, in milliseconds."""
    return sum((suite.duration_ms for suite in suites), 0.0)


def resolve_totals(declared: Totals | None, suites: Iterable[TestSuite]) -> Totals:
    """Return the declared totals, or the suite sums when none were declared."""
    if declared is not None:
        return declared
    totals = sum_suites(suites)
    logger.debug("totals_recomputed", total=totals.total, passed=totals.passed)
    return totals


def resolve_duration(declared: float | None, suites: Iterable[TestSuite]) -> float:
    """Return the declared duration, or the suite sum when none was declared."""
    if declared is not None:
        return declared
    return sum_durations(suites)
