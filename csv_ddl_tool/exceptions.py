"""Errors raised while reading a source and inferring its schema."""

from __future__ import annotations
from typing import Optional


class CsvDdlError(Exception):
    """Base class for every error the tool reports to the user."""

    error_code = "CSV_DDL_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class SourceUnreadable(CsvDdlError):
    """The input could not be opened, decoded or parsed."""

    error_code = "SOURCE_UNREADABLE"

    def __init__(self, source: str, reason: str):
        super().__init__(f"cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


class EmptySource(CsvDdlError):
    """The input holds no rows, so there is no column count to work from."""

    error_code = "EMPTY_SOURCE"

    def __init__(self, source: str = "input"):
        super().__init__(f"{source} has no records")
        self.source = source


class RowWidthMismatch(CsvDdlError):
    """
    A row's field count differs from the established column count.

    ``row_number`` is the 1-based record number in the source, counting
    the header row when there is one.
    """

    error_code = "ROW_WIDTH_MISMATCH"

    def __init__(self, row_number: int, expected: int, actual: int):
        super().__init__(
            f"row {row_number} has {actual} fields, expected {expected}"
        )
        self.row_number = row_number
        self.expected = expected
        self.actual = actual


class ColumnNamesMismatch(CsvDdlError):
    """The override column list does not match the column count."""

    error_code = "COLUMN_NAMES_MISMATCH"

    def __init__(self, provided: int, expected: int):
        super().__init__(
            f"{provided} column names provided but the input has {expected} columns"
        )
        self.provided = provided
        self.expected = expected


class ConfigurationError(CsvDdlError):
    """Invalid option value or configuration file."""

    error_code = "CONFIGURATION_ERROR"


class ExportFailed(CsvDdlError):
    """The schema file could not be written."""

    error_code = "EXPORT_FAILED"

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot write schema file {path}: {reason}")
        self.path = path
        self.reason = reason
