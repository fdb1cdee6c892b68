"""Entry points: parse a report into the canonical TestResult.

Each call parses exactly one document and returns exactly one TestResult.
Options are a ParseOptions or a plain mapping such as
``{"type": "junit", "ignore_error_count": True}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from trparser.config import get_settings
from trparser.core.models import TestResult
from trparser.documents import load_document
from trparser.fetch import fetch_document
from trparser.logging import get_logger
from trparser.transformers import ParseOptions, get_transformer

logger = get_logger(__name__)

Options = ParseOptions | Mapping[str, Any]


def _coerce(options: Options) -> ParseOptions:
    return ParseOptions.coerce(options, ignore_error_count=get_settings().ignore_error_count)


def transform(document: Any, options: Options) -> TestResult:
    """Transform an already-deserialized document.

    Args:
        document: Nested structure mirroring the source schema.
        options: Parse options; ``type`` selects the transformer.

    Returns:
        The canonical TestResult.

    Raises:
        FormatError: If the type is unsupported or the document does not
            have the root shape of that type.
    """
    parse_options = _coerce(options)
    result = get_transformer(parse_options.type).transform(document, parse_options)
    logger.debug(
        "document_parsed",
        report_type=parse_options.type.value,
        suites=len(result.suites),
        cases=len(result.cases),
        total=result.total,
        status=result.status.value,
    )
    return result


def parse_string(content: str | bytes, options: Options) -> TestResult:
    """Parse a report held in memory."""
    parse_options = _coerce(options)
    transformer = get_transformer(parse_options.type)
    return transform(load_document(content, transformer.source_format), parse_options)


def parse(path: Path | str, options: Options) -> TestResult:
    """Parse a report file from the local file system."""
    content = Path(path).read_bytes()
    logger.debug("document_read", path=str(path), size=len(content))
    return parse_string(content, options)


def parse_many(paths: Iterable[Path | str], options: Options) -> list[TestResult]:
    """Parse several report files, one TestResult per file, in order."""
    return [parse(path, options) for path in paths]


async def parse_from_url(
    url: str,
    options: Options,
    headers: dict[str, str] | None = None,
) -> TestResult:
    """Fetch a report over HTTP(S) and parse it.

    Raises:
        RemoteDocumentError: If the document cannot be fetched.
        FormatError: If the fetched document does not match the type.
    """
    parse_options = _coerce(options)
    content = await fetch_document(url, headers)
    return parse_string(content, parse_options)
