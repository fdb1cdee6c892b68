"""Selection of the transformer for a report type.

The set of formats is closed: each ReportType has exactly one transformer
and the choice is made once per parse call, here.
"""

from __future__ import annotations

from types import MappingProxyType

from .base import ReportTransformer, ReportType
from .cucumber import CucumberTransformer
from .junit import JUnitTransformer
from .nunit import NUnitTransformer

TRANSFORMERS: MappingProxyType[ReportType, ReportTransformer] = MappingProxyType(
    {
        ReportType.JUNIT: JUnitTransformer(),
        ReportType.CUCUMBER: CucumberTransformer(),
        ReportType.NUNIT: NUnitTransformer(),
    }
)


def get_transformer(report_type: ReportType | str) -> ReportTransformer:
    """Return the transformer for a report type.

    Args:
        report_type: A ReportType or its identifier ("junit", "cucumber", "nunit").

    Raises:
        FormatError: If the identifier is not a supported report type.
    """
    return TRANSFORMERS[ReportType.from_name(report_type)]
