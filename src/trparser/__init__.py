"""trparser - Convert JUnit, NUnit and Cucumber reports into one result model."""

__version__ = "0.4.0"

from trparser.core.exceptions import FieldError, FormatError, ParserError, RemoteDocumentError
from trparser.core.models import Status, TestAttachment, TestCase, TestResult, TestSuite
from trparser.parser import parse, parse_from_url, parse_many, parse_string, transform
from trparser.transformers import ParseOptions, ReportType

__all__ = [
    "FieldError",
    "FormatError",
    "ParseOptions",
    "ParserError",
    "RemoteDocumentError",
    "ReportType",
    "Status",
    "TestAttachment",
    "TestCase",
    "TestResult",
    "TestSuite",
    "parse",
    "parse_from_url",
    "parse_many",
    "parse_string",
    "transform",
]
