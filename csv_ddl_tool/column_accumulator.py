"""Per-column folding of classified values into a ColumnEstimate."""

from __future__ import annotations
from typing import Iterable, Optional

from .field_classifier import FieldClassifier
from .models import ColumnEstimate
from .value_kind import ValueKind


class ColumnAccumulator:
    """
    Running type estimate for one column.

    ``kind`` starts at NULL (unseen) and only moves up the lattice.
    ``nullable`` flips to True the first time a null value is observed.
    """

    def __init__(self, name: str, classifier: Optional[FieldClassifier] = None):
        self.name = name
        self.classifier = classifier or FieldClassifier()
        self.kind = ValueKind.NULL
        self.nullable = False
        self.observed = 0

    def observe(self, raw_value: str) -> None:
        """Fold one raw field value into the estimate."""
        self.observed += 1
        kind = self.classifier.classify(raw_value)
        if kind == ValueKind.NULL:
            self.nullable = True
        else:
            self.kind = self.kind.join(kind)

    def observe_all(self, raw_values: Iterable[str]) -> "ColumnAccumulator":
        for raw_value in raw_values:
            self.observe(raw_value)
        return self

    def merge(self, other: "ColumnAccumulator") -> "ColumnAccumulator":
        """
        Combine two partial accumulators for the same column.

        The join is commutative and associative, so a column can be split
        into chunks, folded separately and merged in any order.
        """
        merged = ColumnAccumulator(self.name, self.classifier)
        merged.kind = self.kind.join(other.kind)
        merged.nullable = self.nullable or other.nullable
        merged.observed = self.observed + other.observed
        return merged

    def finalize(self) -> ColumnEstimate:
        """
        Freeze the estimate.

        A column that never saw a non-null value is TEXT, and a column that
        saw no values at all is also nullable.
        """
        kind = self.kind if self.kind != ValueKind.NULL else ValueKind.TEXT
        nullable = self.nullable or self.observed == 0
        return ColumnEstimate(name=self.name, kind=kind, nullable=nullable)

    def __repr__(self) -> str:
        return (
            f"ColumnAccumulator(name={self.name!r}, kind={self.kind.value}, "
            f"nullable={self.nullable}, observed={self.observed})"
        )
