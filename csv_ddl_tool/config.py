"""
Configuration for csv-ddl.

Values come from, highest precedence first: command line flags, a YAML
config file, ``CSV_DDL_*`` environment variables (``.env`` is read too),
and the defaults below. The result is a pair of frozen models that are
built once and passed explicitly to the engine and emitters.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.config import normalize_log_level

from .column_names import parse_column_list
from .exceptions import ConfigurationError

DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


def normalize_delimiter(value: str) -> str:
    """Map ``\\t``/``tab`` to a tab and require a single character."""
    value = DELIMITER_ALIASES.get(value, value)
    if len(value) != 1:
        raise ValueError(f"delimiter must be a single character, got {value!r}")
    return value


class InferenceConfig(BaseModel):
    """Options that change how rows are read and typed."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    delimiter: str = Field(default=",", description="Field delimiter")
    has_header: bool = Field(default=True, description="First row holds column names")
    column_names: Optional[Tuple[str, ...]] = Field(
        default=None, description="Override column names"
    )
    null_sentinel: str = Field(default="", description="Value read as null")
    extended_types: bool = Field(
        default=False, description="Also detect boolean, date and timestamp columns"
    )

    @field_validator('delimiter')
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        return normalize_delimiter(v)

    @field_validator('column_names')
    @classmethod
    def validate_column_names(cls, v: Optional[Tuple[str, ...]]) -> Optional[Tuple[str, ...]]:
        if v is not None and any(name == "" for name in v):
            raise ValueError("column names must not be empty")
        return v


class OutputConfig(BaseModel):
    """Options that change what gets emitted."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    table_name: str = Field(..., min_length=1, description="Target table name")
    drop_table: bool = Field(default=False, description="Prepend drop table if exists")
    emit_copy: bool = Field(default=True, description="Append the \\copy directive")
    export_schema_dir: Optional[Path] = Field(
        default=None, description="Directory for the YAML schema export"
    )


class CsvDdlSettings(BaseSettings):
    """
    Defaults read from the environment and the config file.

    Field names match the long command line options.
    """
    model_config = SettingsConfigDict(
        env_prefix='CSV_DDL_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False
    )

    delimiter: str = Field(default=",")
    null_as: str = Field(default="")
    no_header: bool = Field(default=False)
    columns: Optional[str] = Field(default=None)
    table_name: Optional[str] = Field(default=None)
    drop: bool = Field(default=False)
    no_copy: bool = Field(default=False)
    extended_types: bool = Field(default=False)
    export_schema: Optional[Path] = Field(default=None)
    log_level: Optional[str] = Field(default=None)

    @field_validator('delimiter')
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        return normalize_delimiter(v)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return normalize_log_level(v)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """
    Read a YAML mapping of option defaults.

    Keys use the long option names with underscores, e.g. ``null_as``.
    """
    if path is None:
        return {}
    config_path = Path(path)
    try:
        with config_path.open(encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {config_path}: {e.strerror or e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {config_path} must contain a mapping")

    unknown = sorted(set(data) - set(CsvDdlSettings.model_fields))
    if unknown:
        raise ConfigurationError(
            f"unknown option(s) in {config_path}: {', '.join(unknown)}"
        )
    return data


def load_settings(
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CsvDdlSettings:
    """
    Merge config file and explicit overrides over environment defaults.

    Overrides whose value is None are treated as not given.
    """
    values = load_config_file(config_path)
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CsvDdlSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(e))


def table_name_from_path(path: Optional[Path]) -> Optional[str]:
    """Default table name: the file name without its extension."""
    if path is None:
        return None
    return path.stem


def build_configs(
    settings: CsvDdlSettings,
    source_path: Optional[Path] = None,
) -> Tuple[InferenceConfig, OutputConfig]:
    """Turn merged settings into the engine and emitter configurations."""
    table_name = settings.table_name or table_name_from_path(source_path)
    if not table_name:
        raise ConfigurationError("a table name is required when reading standard input")

    column_names = parse_column_list(settings.columns)
    try:
        inference = InferenceConfig(
            delimiter=settings.delimiter,
            has_header=not settings.no_header,
            column_names=tuple(column_names) if column_names is not None else None,
            null_sentinel=settings.null_as,
            extended_types=settings.extended_types,
        )
        output = OutputConfig(
            table_name=table_name,
            drop_table=settings.drop,
            emit_copy=not settings.no_copy,
            export_schema_dir=settings.export_schema,
        )
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(e))
    return inference, output


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "config"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)
