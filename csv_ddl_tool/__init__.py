"""Infer a PostgreSQL table definition from a delimited text file."""

__version__ = "0.1.0"

from .value_kind import ValueKind
from .field_classifier import FieldClassifier, classify_field
from .column_accumulator import ColumnAccumulator
from .models import ColumnEstimate, Schema
from .config import InferenceConfig, OutputConfig
from .schema_inference import SchemaInferenceEngine, infer_schema
from .ddl_generator import create_table_sql, export_schema_yaml
from .data_loader import copy_from_file_sql
from .exceptions import (
    CsvDdlError,
    SourceUnreadable,
    EmptySource,
    RowWidthMismatch,
    ColumnNamesMismatch,
    ConfigurationError,
    ExportFailed,
)

__all__ = [
    "ValueKind",
    "FieldClassifier",
    "classify_field",
    "ColumnAccumulator",
    "ColumnEstimate",
    "Schema",
    "InferenceConfig",
    "OutputConfig",
    "SchemaInferenceEngine",
    "infer_schema",
    "create_table_sql",
    "export_schema_yaml",
    "copy_from_file_sql",
    "CsvDdlError",
    "SourceUnreadable",
    "EmptySource",
    "RowWidthMismatch",
    "ColumnNamesMismatch",
    "ConfigurationError",
    "ExportFailed",
]
