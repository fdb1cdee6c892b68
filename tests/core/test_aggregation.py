"""Tests for the aggregation engine."""

from __future__ import annotations

from trparser.core.aggregation import Totals, resolve_duration, resolve_totals, sum_durations, sum_suites
from trparser.core.models import Status, TestSuite


def _suite(name: str, **counts) -> TestSuite:
    return TestSuite(name=name, status=Status.PASS, **counts)


SUITES = (
    _suite("a", total=4, passed=3, failed=1, duration_ms=100.0),
    _suite("b", total=3, passed=1, errors=1, skipped=1, duration_ms=50.5),
)


class TestTotals:
    """Tests for the Totals value object."""

    def test_from_counts_sums_outcomes(self):
        """total is the sum of the four outcomes."""
        totals = Totals.from_counts(passed=2, failed=1, errors=1, skipped=3)

        assert totals == Totals(total=7, passed=2, failed=1, errors=1, skipped=3)


class TestRollup:
    """Tests for suite rollup."""

    def test_sum_suites(self):
        """Every counter is summed across suites."""
        assert sum_suites(SUITES) == Totals(total=7, passed=4, failed=1, errors=1, skipped=1)

    def test_sum_durations(self):
        """Durations are summed in milliseconds."""
        assert sum_durations(SUITES) == 150.5

    def test_sum_of_nothing(self):
        """No suites roll up to zero."""
        assert sum_suites(()) == Totals()
        assert sum_durations(()) == 0.0

    def test_resolve_totals_recomputes_when_absent(self):
        """Absent declared totals are recovered from the suites."""
        totals = resolve_totals(None, SUITES)

        assert totals.total == 7
        assert totals.total == totals.passed + totals.failed + totals.errors + totals.skipped

    def test_resolve_totals_keeps_declared_values(self):
        """Declared totals are authoritative even when inconsistent."""
        declared = Totals(total=100, passed=1, failed=0, errors=0, skipped=0)

        assert resolve_totals(declared, SUITES) is declared

    def test_resolve_duration(self):
        """A declared duration wins, otherwise suites are summed."""
        assert resolve_duration(12.0, SUITES) == 12.0
        assert resolve_duration(None, SUITES) == 150.5
