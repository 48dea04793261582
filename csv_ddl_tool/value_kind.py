"""Value kinds inferred for single fields, and their lattice join."""

from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Iterable


class ValueKind(str, Enum):
    """
    Inferred primitive type of a field value.

    NULL is the bottom of the lattice and TEXT is the top. Between them
    sit three disjoint chains: INTEGER < FLOAT, DATE < TIMESTAMP, and
    BOOLEAN on its own. Kinds on different chains join to TEXT.
    """
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TEXT = "text"

    def join(self, other: "ValueKind") -> "ValueKind":
        """Least upper bound of two kinds."""
        return _JOIN_TABLE[frozenset((self, other))]


_CHAINS = (
    (ValueKind.INTEGER, ValueKind.FLOAT),
    (ValueKind.DATE, ValueKind.TIMESTAMP),
    (ValueKind.BOOLEAN,),
)


def _build_join_table() -> Dict[FrozenSet[ValueKind], ValueKind]:
    table: Dict[FrozenSet[ValueKind], ValueKind] = {}
    for a in ValueKind:
        for b in ValueKind:
            if a == b or b == ValueKind.NULL:
                result = a
            elif a == ValueKind.NULL:
                result = b
            else:
                result = ValueKind.TEXT
                for chain in _CHAINS:
                    if a in chain and b in chain:
                        result = max(a, b, key=chain.index)
                        break
            table[frozenset((a, b))] = result
    return table


_JOIN_TABLE = _build_join_table()


def join_all(kinds: Iterable[ValueKind]) -> ValueKind:
    """Fold any number of kinds into one, starting from NULL."""
    result = ValueKind.NULL
    for kind in kinds:
        result = result.join(kind)
    return result
