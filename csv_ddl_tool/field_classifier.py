"""Classify one raw field string into a ValueKind."""

from __future__ import annotations
import re
from datetime import datetime
from typing import Optional, Sequence

from .value_kind import ValueKind

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
FLOAT_PATTERN = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')

BOOLEAN_VALUES = {"true", "false"}

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
)

TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)


def is_integer(value: str) -> bool:
    """
    True for a base-10 integer that fits a signed 64-bit column.

    A leading ``+`` is accepted like a leading ``-``, so ``"+7"`` is an
    integer. A sign with no digits is not.
    """
    if not INTEGER_PATTERN.fullmatch(value):
        return False
    sign = "-" if value.startswith("-") else ""
    digits = value.lstrip("+-").lstrip("0") or "0"
    # int64 has at most 19 significant digits; also keeps int() away from huge strings
    if len(digits) > 19:
        return False
    return INT64_MIN <= int(sign + digits) <= INT64_MAX


def is_float(value: str) -> bool:
    """True for a decimal or exponential number (no inf/nan)."""
    return FLOAT_PATTERN.fullmatch(value) is not None


def _matches_any(value: str, formats: Sequence[str]) -> bool:
    if value != value.strip():
        return False
    for fmt in formats:
        try:
            datetime.strptime(value, fmt)
            return True
        except ValueError:
            continue
    return False


def is_boolean(value: str) -> bool:
    return value.lower() in BOOLEAN_VALUES


def is_date(value: str) -> bool:
    return _matches_any(value, DATE_FORMATS)


def is_timestamp(value: str) -> bool:
    return _matches_any(value, TIMESTAMP_FORMATS)


def classify_field(value: str, null_sentinel: str = "", extended: bool = False) -> ValueKind:
    """
    Classify a raw field value.

    The value is compared to ``null_sentinel`` verbatim and is never
    trimmed, so ``" 1"`` is TEXT. Numbers may carry a leading ``+`` or
    ``-``. Failed numeric parses fall through to the next, less specific
    kind; nothing here raises.

    Args:
        value: Raw field text as read from the source
        null_sentinel: String that stands for a missing value
        extended: Also detect BOOLEAN, DATE and TIMESTAMP values

    Returns:
        The most specific ValueKind the value parses as
    """
    if value == null_sentinel:
        return ValueKind.NULL
    if is_integer(value):
        return ValueKind.INTEGER
    if is_float(value):
        return ValueKind.FLOAT
    if extended:
        if is_boolean(value):
            return ValueKind.BOOLEAN
        if is_date(value):
            return ValueKind.DATE
        if is_timestamp(value):
            return ValueKind.TIMESTAMP
    return ValueKind.TEXT


class FieldClassifier:
    """Field classifier bound to one null sentinel and detection mode."""

    def __init__(self, null_sentinel: Optional[str] = "", extended: bool = False):
        self.null_sentinel = null_sentinel if null_sentinel is not None else ""
        self.extended = extended

    def classify(self, value: str) -> ValueKind:
        return classify_field(value, self.null_sentinel, self.extended)
