"""Column name resolution: override list, header row or letters."""

from __future__ import annotations
import string
from typing import List, Optional, Sequence


def letter_name(index: int) -> str:
    """
    Positional name for a 0-based column index.

    Bijective base 26: ``0 -> a``, ``25 -> z``, ``26 -> aa``, ``27 -> ab``.
    """
    if index < 0:
        raise ValueError("column index must be non-negative")
    name = ""
    n = index + 1
    while n:
        n, remainder = divmod(n - 1, 26)
        name = string.ascii_lowercase[remainder] + name
    return name


def letter_names(count: int) -> List[str]:
    return [letter_name(i) for i in range(count)]


def normalize_header_name(name: str) -> str:
    """Lower-case a header cell and replace spaces with underscores."""
    return name.lower().replace(" ", "_")


def parse_column_list(columns: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated override list; None when not given."""
    if columns is None:
        return None
    return columns.split(",")


def resolve_column_names(
    width: int,
    header: Optional[Sequence[str]] = None,
    override: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Pick column names by policy.

    Args:
        width: Established column count
        header: Header row, when the source has one
        override: Explicit names, which win over the header

    Returns:
        One name per column, in column order
    """
    if override is not None:
        return list(override)
    if header is not None:
        # An empty header cell keeps its positional letter name
        return [normalize_header_name(name) or letter_name(i) for i, name in enumerate(header)]
    return letter_names(width)
