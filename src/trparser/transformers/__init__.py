"""Format-specific transformers into the canonical result model.

Usage:
    from trparser.transformers import ParseOptions, ReportType, get_transformer

    options = ParseOptions(type=ReportType.JUNIT)
    result = get_transformer(options.type).transform(document, options)
"""

from .base import ParseOptions, ReportTransformer, ReportType
from .cucumber import CucumberTransformer
from .junit import JUnitTransformer
from .nunit import NUnitTransformer
from .registry import TRANSFORMERS, get_transformer

__all__ = [
    "CucumberTransformer",
    "JUnitTransformer",
    "NUnitTransformer",
    "ParseOptions",
    "ReportTransformer",
    "ReportType",
    "TRANSFORMERS",
    "get_transformer",
]
