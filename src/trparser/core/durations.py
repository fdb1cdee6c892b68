"""Duration normalization and declared numeric field reading.

Every duration in the canonical model is expressed in milliseconds:

- JUnit ``time`` and NUnit ``time``/``duration`` attributes are seconds.
- Cucumber step ``result.duration`` values are nanoseconds.
"""

from __future__ import annotations

import math
from typing import Any

from .exceptions import FieldError

MS_PER_SECOND = 1000
NS_PER_MS = 1_000_000

_MISSING = object()


def read_number(value: Any, field: str, *, default: Any = _MISSING) -> float:
    """Read a numeric attribute value.

    Args:
        value: Raw value from the document (usually a string).
        field: Field name, used in the error message.
        default: Returned when the value is absent or blank. Without a
            default an absent value is an error.

    Returns:
        The value as a float.

    Raises:
        FieldError: If the value is not a finite number, or absent without a
            default.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is _MISSING:
            raise FieldError(field)
        return default
    if isinstance(value, bool):
        raise FieldError(field, value)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise FieldError(field, value) from e
    if not math.isfinite(number):
        raise FieldError(field, value)
    return number


def read_count(value: Any) -> int | None:
    """Read a declared counter leniently.

    Returns None for absent or unparseable values so callers can fall back
    to counting children.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def read_seconds(value: Any) -> float | None:
    """Read a declared seconds value leniently, returning None when unusable."""
    try:
        return read_number(value, "time", default=None)
    except FieldError:
        return None


def seconds_to_ms(seconds: float) -> float:
    """Convert seconds to milliseconds."""
    return seconds * MS_PER_SECOND


def nanoseconds_to_ms(nanoseconds: float) -> float:
    """Convert nanoseconds to milliseconds, rounded to 2 decimals.

    >>> nanoseconds_to_ms(1_923_164_000)
    1923.16
    """
    return round(nanoseconds / NS_PER_MS, 2)
