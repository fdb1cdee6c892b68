"""Canonical result model shared by every report format.

Whatever the source (JUnit XML, NUnit XML, Cucumber JSON), a parse call
produces one TestResult tree:

    TestResult -> TestSuite -> TestCase -> TestAttachment

The tree is built bottom-up (cases first, then suites, then the result)
and never mutated afterwards, so every node is a frozen dataclass and
child sequences are tuples. Metadata dicts are always private copies;
no two nodes share one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(Enum):
    """Outcome of a case, suite or result.

    Suites and results only ever use PASS, FAIL and SKIP; ERROR is a
    case-level outcome.
    """

    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"
    SKIP = "SKIP"


@dataclass(frozen=True)
class TestAttachment:
    """A file attached to a test case."""

    __test__ = False

    path: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"path": self.path, "name": self.name}


@dataclass(frozen=True)
class TestCase:
    """A single executed (or skipped) test."""

    __test__ = False

    name: str
    status: Status
    duration_ms: float = 0.0
    failure: str | None = None
    stack_trace: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    attachments: tuple[TestAttachment, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "status": self.status.value,
            "duration_ms": self.duration_ms,
            "failure": self.failure,
            "stack_trace": self.stack_trace,
            "metadata": dict(self.metadata),
            "attachments": [a.to_dict() for a in self.attachments],
        }


@dataclass(frozen=True)
class TestSuite:
    """A named group of cases: a fixture, a feature file, a JUnit testsuite."""

    __test__ = False

    name: str
    status: Status
    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    skipped: int = 0
    duration_ms: float = 0.0
    metadata: dict[str, str] = field(default_factory=dict)
    cases: tuple[TestCase, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "status": self.status.value,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "skipped": self.skipped,
            "duration_ms": self.duration_ms,
            "metadata": dict(self.metadata),
            "cases": [c.to_dict() for c in self.cases],
        }


@dataclass(frozen=True)
class TestResult:
    """Root of the canonical tree: one per parsed document."""

    __test__ = False

    name: str
    status: Status
    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    skipped: int = 0
    duration_ms: float = 0.0
    suites: tuple[TestSuite, ...] = ()

    @property
    def cases(self) -> list[TestCase]:
        """All cases of all suites, in document order."""
        return [case for suite in self.suites for case in suite.cases]

    def summary(self) -> dict[str, Any]:
        """Get summary statistics for the result."""
        return {
            "status": self.status.value,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "skipped": self.skipped,
            "duration_ms": self.duration_ms,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {"name": self.name}
        data.update(self.summary())
        data["suites"] = [s.to_dict() for s in self.suites]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResult:
        """Deserialize from dictionary produced by to_dict()."""
        suites = tuple(_suite_from_dict(s) for s in data.get("suites", []))
        return cls(
            name=data.get("name", ""),
            status=Status(data.get("status", Status.SKIP.value)),
            total=data.get("total", 0),
            passed=data.get("passed", 0),
            failed=data.get("failed", 0),
            errors=data.get("errors", 0),
            skipped=data.get("skipped", 0),
            duration_ms=data.get("duration_ms", 0.0),
            suites=suites,
        )


def _suite_from_dict(data: dict[str, Any]) -> TestSuite:
    cases = tuple(_case_from_dict(c) for c in data.get("cases", []))
    return TestSuite(
        name=data.get("name", ""),
        status=Status(data.get("status", Status.SKIP.value)),
        total=data.get("total", 0),
        passed=data.get("passed", 0),
        failed=data.get("failed", 0),
        errors=data.get("errors", 0),
        skipped=data.get("skipped", 0),
        duration_ms=data.get("duration_ms", 0.0),
        metadata=dict(data.get("metadata", {})),
        cases=cases,
    )


def _case_from_dict(data: dict[str, Any]) -> TestCase:
    attachments = tuple(
        TestAttachment(path=a.get("path", ""), name=a.get("name"))
        for a in data.get("attachments", [])
    )
    return TestCase(
        name=data.get("name", ""),
        status=Status(data.get("status", Status.PASS.value)),
        duration_ms=data.get("duration_ms", 0.0),
        failure=data.get("failure"),
        stack_trace=data.get("stack_trace"),
        metadata=dict(data.get("metadata", {})),
        attachments=attachments,
    )
