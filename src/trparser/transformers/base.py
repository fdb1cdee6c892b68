"""Abstract base class for report transformers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from trparser.core.exceptions import FormatError
from trparser.core.models import TestResult


class ReportType(Enum):
    """Supported report formats."""

    JUNIT = "junit"
    CUCUMBER = "cucumber"
    NUNIT = "nunit"

    @classmethod
    def from_name(cls, name: str | ReportType) -> ReportType:
        """Look up a report type by its identifier (case-insensitive)."""
        if isinstance(name, ReportType):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            supported = ", ".join(t.value for t in cls)
            raise FormatError(f"Unsupported report type {name!r} (expected one of: {supported})") from None


@dataclass(frozen=True)
class ParseOptions:
    """Options of a single parse call."""

    type: ReportType
    ignore_error_count: bool = False

    @classmethod
    def coerce(cls, options: ParseOptions | Mapping[str, Any], *, ignore_error_count: bool = False) -> ParseOptions:
        """Build options from a ParseOptions instance or a plain mapping.

        Args:
            options: Existing options, or a mapping with ``type`` and an
                optional ``ignore_error_count``.
            ignore_error_count: Default used when the mapping omits it.

        Raises:
            FormatError: If ``type`` is missing or unsupported.
        """
        if isinstance(options, ParseOptions):
            return options
        if "type" not in options or options["type"] is None:
            raise FormatError("Parse options require a 'type'")
        return cls(
            type=ReportType.from_name(options["type"]),
            ignore_error_count=bool(options.get("ignore_error_count", ignore_error_count)),
        )


class ReportTransformer(ABC):
    """Abstract base class for report transformers.

    Each report format (JUnit, Cucumber, NUnit) has one concrete
    implementation. Transformers are stateless: every call builds a new
    TestResult tree from scratch.
    """

    #: Serialization of the source documents, "xml" or "json".
    source_format: str = "xml"

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the report type this transformer supports."""

    @abstractmethod
    def transform(self, document: Any, options: ParseOptions) -> TestResult:
        """Convert a deserialized document to the canonical model.

        Args:
            document: The deserialized report document.
            options: Options of the current parse call.

        Returns:
            The TestResult built from the document.

        Raises:
            FormatError: If the document lacks the root shape of this format.
        """
