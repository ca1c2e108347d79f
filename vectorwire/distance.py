"""Attach pgvector distance operators to operand pairs for query generation.

Nothing here computes a distance; an expression only knows its operands and
which operator joins them, and renders itself as SQL with ``$n`` placeholders
the way asyncpg expects::

    >>> expr = cosine_distance("embedding", Vector([1, 2, 3]))
    >>> expr.to_sql()
    ('"embedding" <=> $1::vector', [Vector([1.0, 2.0, 3.0])])
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .bit import Bit
from .halfvec import HalfVector
from .sparsevec import SparseVector
from .vector import Vector

VALUE_TYPES = (Vector, HalfVector, SparseVector, Bit)


class Distance(Enum):
    L2 = "<->"
    MAX_INNER_PRODUCT = "<#>"
    COSINE = "<=>"
    L1 = "<+>"
    HAMMING = "<~>"
    JACCARD = "<%>"

    @property
    def bit_only(self) -> bool:
        return self in (Distance.HAMMING, Distance.JACCARD)


def _quote_ident(name: str) -> str:
    """Minimal identifier quoting; dotted names are quoted per part."""
    return ".".join('"' + part.replace('"', '""') + '"' for part in name.split("."))


@dataclass(frozen=True)
class Column:
    name: str
    cast: Optional[str] = None

    def cast_to_halfvec(self, dim: int) -> "Column":
        """Reference the column as ``halfvec(dim)``, as used by half-precision indexes."""
        return Column(self.name, f"halfvec({int(dim)})")

    def to_sql(self) -> str:
        sql = _quote_ident(self.name)
        if self.cast:
            sql = f"{sql}::{self.cast}"
        return sql


Operand = Union[Column, Vector, HalfVector, SparseVector, Bit]


def _as_operand(value: Any) -> Operand:
    if isinstance(value, str):
        return Column(value)
    if isinstance(value, (Column,) + VALUE_TYPES):
        return value
    raise TypeError(
        f"distance operands must be column names or vector values, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class DistanceExpression:
    left: Operand
    right: Operand
    distance: Distance

    def __post_init__(self):
        object.__setattr__(self, "left", _as_operand(self.left))
        object.__setattr__(self, "right", _as_operand(self.right))
        values = [op for op in (self.left, self.right) if not isinstance(op, Column)]
        if len(values) == 2 and type(values[0]) is not type(values[1]):
            raise TypeError(
                f"cannot compare {values[0].type_name} with {values[1].type_name}"
            )
        for value in values:
            if self.distance.bit_only and not isinstance(value, Bit):
                raise TypeError(f"{self.distance.name.lower()} distance requires bit operands")
            if not self.distance.bit_only and isinstance(value, Bit):
                raise TypeError(f"{self.distance.name.lower()} distance is not defined for bit operands")

    @property
    def operator(self) -> str:
        return self.distance.value

    def to_sql(self, start: int = 1) -> tuple[str, list]:
        """Render ``left <op> right``; value operands become numbered parameters."""
        params: list = []
        parts = []
        for op in (self.left, self.right):
            if isinstance(op, Column):
                parts.append(op.to_sql())
            else:
                params.append(op)
                placeholder = f"${start + len(params) - 1}"
                # a bare ::bit cast means bit(1), so bit parameters are left to inference
                if not isinstance(op, Bit):
                    placeholder = f"{placeholder}::{op.type_name}"
                parts.append(placeholder)
        return f"{parts[0]} {self.operator} {parts[1]}", params


def l2_distance(left: Any, right: Any) -> DistanceExpression:
    return DistanceExpression(left, right, Distance.L2)


def max_inner_product(left: Any, right: Any) -> DistanceExpression:
    """Negative inner product; smaller means more similar."""
    return DistanceExpression(left, right, Distance.MAX_INNER_PRODUCT)


def cosine_distance(left: Any, right: Any) -> DistanceExpression:
    return DistanceExpression(left, right, Distance.COSINE)


def l1_distance(left: Any, right: Any) -> DistanceExpression:
    return DistanceExpression(left, right, Distance.L1)


def hamming_distance(left: Any, right: Any) -> DistanceExpression:
    return DistanceExpression(left, right, Distance.HAMMING)


def jaccard_distance(left: Any, right: Any) -> DistanceExpression:
    return DistanceExpression(left, right, Distance.JACCARD)


def distance_expression(name: str, left: Any, right: Any) -> DistanceExpression:
    """Build an expression from an operator name such as ``"cosine"`` or ``"l2"``."""
    key = name.strip().upper().replace("-", "_")
    aliases = {"IP": "MAX_INNER_PRODUCT", "INNER_PRODUCT": "MAX_INNER_PRODUCT", "EUCLIDEAN": "L2"}
    try:
        distance = Distance[aliases.get(key, key)]
    except KeyError:
        raise ValueError(f"Unknown distance '{name}'") from None
    return DistanceExpression(left, right, distance)


__all__ = [
    "Column",
    "Distance",
    "DistanceExpression",
    "cosine_distance",
    "distance_expression",
    "hamming_distance",
    "jaccard_distance",
    "l1_distance",
    "l2_distance",
    "max_inner_product",
]
