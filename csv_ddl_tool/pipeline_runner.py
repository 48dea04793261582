from __future__ import annotations
"""Main pipeline: read the source, infer the schema, render the SQL."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import InferenceConfig, OutputConfig
from .data_loader import copy_from_file_sql
from .ddl_generator import create_table_sql, export_schema_yaml
from .models import Schema
from .schema_inference import SchemaInferenceEngine
from .source_reader import open_source, read_rows, source_label

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    schema: Schema
    sql: str
    schema_file: Optional[Path] = None


def render_sql(schema: Schema, inference: InferenceConfig, output: OutputConfig,
               source_path: Optional[Path] = None) -> str:
    """Create table statement, plus the load directive when it applies."""
    parts = [create_table_sql(output.table_name, schema, drop=output.drop_table)]
    if output.emit_copy:
        if source_path is None:
            logger.info("Reading standard input; no \\copy directive emitted")
        else:
            parts.append(copy_from_file_sql(
                output.table_name,
                source_path,
                schema.column_names,
                delimiter=inference.delimiter,
                has_header=inference.has_header,
                null_sentinel=inference.null_sentinel,
            ))
    return "\n".join(parts) + "\n"


def run_pipeline(source_path: Optional[Path], inference: InferenceConfig,
                 output: OutputConfig) -> PipelineResult:
    """
    Run one inference over ``source_path`` (standard input when None).

    The source is opened once and closed on every exit path. Errors from
    reading or inference propagate unchanged, and nothing is rendered.
    """
    label = source_label(source_path)
    with open_source(source_path) as stream:
        rows = read_rows(stream, inference.delimiter, source=label)
        schema = SchemaInferenceEngine(inference, source=label).infer(rows)

    sql = render_sql(schema, inference, output, source_path)

    schema_file = None
    if output.export_schema_dir is not None:
        schema_file = export_schema_yaml(output.table_name, schema, str(output.export_schema_dir))
        logger.info(f"Schema written to {schema_file}")

    return PipelineResult(schema=schema, sql=sql, schema_file=schema_file)
