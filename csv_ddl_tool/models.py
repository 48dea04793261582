"""
Schema Models
=============

Pydantic models for the inferred schema. Both are frozen: once the
engine finalizes a schema nothing downstream can change it.
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .value_kind import ValueKind


class ColumnEstimate(BaseModel):
    """Inferred type and nullability of one column."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name")
    kind: ValueKind = Field(..., description="Join of every non-null value's kind")
    nullable: bool = Field(..., description="True if a null value was seen")


class Schema(BaseModel):
    """Ordered column estimates for an entire input, in column order."""
    model_config = ConfigDict(frozen=True)

    columns: Tuple[ColumnEstimate, ...] = Field(default_factory=tuple)
    row_count: int = Field(default=0, ge=0, description="Data rows consumed")

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain ``{name, kind, nullable}`` dictionaries, in column order."""
        return [
            {"name": c.name, "kind": c.kind.value, "nullable": c.nullable}
            for c in self.columns
        ]
