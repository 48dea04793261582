"""Schema inference for delimited sources."""

from __future__ import annotations
import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .column_accumulator import ColumnAccumulator
from .column_names import resolve_column_names
from .config import InferenceConfig
from .exceptions import ColumnNamesMismatch, EmptySource, RowWidthMismatch
from .field_classifier import FieldClassifier
from .models import Schema

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"
    FAILED = "failed"


class SchemaInferenceEngine:
    """
    Folds a single pass over the rows into a finalized Schema.

    The column count is fixed by the header, or by the first data row
    when there is no header. Any later row of a different width is fatal
    and no schema is produced.
    """

    def __init__(self, config: Optional[InferenceConfig] = None, source: str = "input"):
        self.config = config or InferenceConfig()
        self.source = source
        self.classifier = FieldClassifier(
            self.config.null_sentinel, extended=self.config.extended_types
        )
        self.state = EngineState.UNINITIALIZED
        self.accumulators: List[ColumnAccumulator] = []
        self.width = 0
        self.row_count = 0

    def infer(self, rows: Iterable[Sequence[str]]) -> Schema:
        """
        Consume ``rows`` and return the inferred schema.

        Raises:
            EmptySource: there was not a single row
            ColumnNamesMismatch: override names do not match the column count
            RowWidthMismatch: a row's width differs from the column count;
                ``row_number`` is 1-based and counts the header row
        """
        if self.state != EngineState.UNINITIALIZED:
            raise RuntimeError(f"engine already used (state: {self.state.value})")

        record_number = 0
        try:
            for row in rows:
                record_number += 1
                if self.state == EngineState.UNINITIALIZED:
                    self._start(row)
                    if self.config.has_header:
                        continue
                self._accumulate(row, record_number)
        except Exception:
            self.state = EngineState.FAILED
            self.accumulators = []
            raise

        if self.state == EngineState.UNINITIALIZED:
            self.state = EngineState.FAILED
            raise EmptySource(self.source)

        if self.row_count == 0:
            logger.warning(f"{self.source} has a header but no data rows; all columns default to text")

        schema = Schema(
            columns=tuple(acc.finalize() for acc in self.accumulators),
            row_count=self.row_count,
        )
        self.state = EngineState.FINALIZED
        logger.info(
            f"Inferred {len(schema.columns)} columns from {self.row_count} rows of {self.source}"
        )
        return schema

    def _start(self, first_row: Sequence[str]) -> None:
        self.width = len(first_row)
        override = self.config.column_names
        if override is not None and len(override) != self.width:
            raise ColumnNamesMismatch(len(override), self.width)

        header = first_row if self.config.has_header else None
        names = resolve_column_names(self.width, header=header, override=override)
        self.accumulators = [ColumnAccumulator(name, self.classifier) for name in names]
        self.state = EngineState.ACCUMULATING
        logger.debug(f"Columns: {', '.join(names)}")

    def _accumulate(self, row: Sequence[str], record_number: int) -> None:
        if len(row) != self.width:
            raise RowWidthMismatch(record_number, self.width, len(row))
        for accumulator, value in zip(self.accumulators, row):
            accumulator.observe(value)
        self.row_count += 1


def infer_schema(rows: Iterable[Sequence[str]], config: Optional[InferenceConfig] = None,
                 source: str = "input") -> Schema:
    """Infer a schema from rows with a fresh engine."""
    return SchemaInferenceEngine(config, source=source).infer(rows)
