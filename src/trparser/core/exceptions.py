"""Shared exceptions for the trparser package."""

from __future__ import annotations

from typing import Any


class ParserError(Exception):
    """Base class for every error raised while producing a TestResult."""


class FormatError(ParserError):
    """Exception raised when a document does not match the selected report type.

    Raised for a missing root element or collection, an unsupported
    ``type`` option, or a document that cannot be deserialized at all.
    """


class FieldError(FormatError):
    """Exception raised when a required numeric field cannot be read.

    Only used where no safe fallback exists. Absent or invalid declared
    totals are recovered by recomputing them from the children instead.
    """

    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.value is None:
            return f"Missing required numeric field '{self.field}'"
        return f"Field '{self.field}' is not numeric: {self.value!r}"


class RemoteDocumentError(ParserError):
    """Exception raised when a remote report document cannot be fetched."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.message = message
        self.status_code = status_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.status_code:
            return f"Fetching {self.url} failed ({self.status_code}): {self.message}"
        return f"Fetching {self.url} failed: {self.message}"
