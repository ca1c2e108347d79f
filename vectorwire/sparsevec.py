"""Sparse vector (`sparsevec` column) and its binary codec.

Wire layout (big-endian)::

    i32 dim | i32 nnz | i32 reserved (0) | nnz x i32 index | nnz x f32 value

Indices are zero-based on the wire and one-based in the text form.
"""
import re
import struct
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from . import config
from ._common import INT32_MAX, format_float, parse_float, readonly, require_length
from .errors import (
    DimensionOverflowError,
    EmptyVectorError,
    InvalidSparseLayoutError,
    ReservedFieldNonZeroError,
    TextFormatError,
)

_HEADER = struct.Struct(">iii")
_TEXT_RE = re.compile(r"^\{(?P<body>.*)\}/(?P<dim>\d+)$", re.DOTALL)


def _check_layout(dim: int, indices: np.ndarray) -> None:
    nnz = indices.shape[0]
    if nnz == 0 and dim == 0:
        return
    if nnz >= dim:
        raise InvalidSparseLayoutError(
            f"sparsevec must have fewer nonzero elements than dimensions, got nnz={nnz} dim={dim}"
        )
    if nnz == 0:
        return
    if indices[0] < 0 or indices[-1] >= dim:
        raise InvalidSparseLayoutError(f"sparsevec indices must be within [0, {dim})")
    if np.any(np.diff(indices.astype(np.int64)) <= 0):
        raise InvalidSparseLayoutError("sparsevec indices must be strictly ascending and unique")


class SparseVector:
    """Immutable sparse vector: a dimension plus sorted (index, value) pairs.

    Pairs may be given in any order; they are sorted by index. Duplicate or
    out-of-range indices are rejected rather than merged.
    """

    type_name = "sparsevec"
    __slots__ = ("_dim", "_indices", "_values")

    def __init__(self, dim: int, indices: Sequence[int], values: Sequence[float]):
        dim = int(dim)
        if dim < 0:
            raise InvalidSparseLayoutError(f"sparsevec dimension must be non-negative, got {dim}")
        if dim > INT32_MAX:
            raise DimensionOverflowError(f"sparsevec cannot have more than {INT32_MAX} dimensions, got {dim}")
        try:
            idx = np.array(indices, dtype=np.int64).reshape(-1)
            vals = np.array(values, dtype=np.float32).reshape(-1)
        except (OverflowError, ValueError, TypeError) as exc:
            raise InvalidSparseLayoutError(f"invalid sparsevec indices or values: {exc}") from exc
        if idx.shape[0] != vals.shape[0]:
            raise InvalidSparseLayoutError(
                f"indices and values must have the same length, got {idx.shape[0]} and {vals.shape[0]}"
            )
        order = np.argsort(idx, kind="stable")
        idx = idx[order]
        _check_layout(dim, idx)
        self._dim = dim
        self._indices = readonly(idx.astype(np.int32))
        self._values = readonly(vals[order])

    @classmethod
    def _from_arrays(cls, dim: int, indices: np.ndarray, values: np.ndarray) -> "SparseVector":
        obj = cls.__new__(cls)
        obj._dim = dim
        obj._indices = readonly(indices)
        obj._values = readonly(values)
        return obj

    @classmethod
    def from_dense(cls, value: Any) -> "SparseVector":
        """Keep every position whose value is not equal to zero (``-0.0`` counts as zero)."""
        dense = np.array(value, dtype=np.float32)
        if dense.ndim != 1:
            raise ValueError(f"expected a one-dimensional sequence, got ndim={dense.ndim}")
        positions = np.flatnonzero(dense)
        return cls._from_arrays(dense.shape[0], positions.astype(np.int32), dense[positions])

    @classmethod
    def from_dict(cls, mapping: Mapping[int, float], dim: int) -> "SparseVector":
        return cls(dim, list(mapping.keys()), list(mapping.values()))

    @classmethod
    def from_text(cls, text: str) -> "SparseVector":
        match = _TEXT_RE.match(text.strip())
        if match is None:
            raise TextFormatError(f"sparsevec literal must look like '{{1:1,3:2}}/5': {text!r}")
        indices, values = [], []
        body = match.group("body").strip()
        for element in body.split(",") if body else []:
            key, sep, val = element.partition(":")
            if not sep:
                raise TextFormatError(f"invalid sparsevec element '{element.strip()}'")
            try:
                indices.append(int(key.strip()) - 1)
            except ValueError as exc:
                raise TextFormatError(f"invalid sparsevec index '{key.strip()}'") from exc
            values.append(parse_float(val))
        return cls(int(match.group("dim")), indices, values)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def nnz(self) -> int:
        return self._indices.shape[0]

    @property
    def indices(self) -> list[int]:
        return self._indices.tolist()

    @property
    def values(self) -> list[float]:
        return self._values.tolist()

    def __len__(self) -> int:
        return self._dim

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return (
            self._dim == other._dim
            and self._indices.tobytes() == other._indices.tobytes()
            and self._values.tobytes() == other._values.tobytes()
        )

    def __hash__(self) -> int:
        return hash((self.type_name, self._dim, self._indices.tobytes(), self._values.tobytes()))

    def __repr__(self) -> str:
        return f"SparseVector({self.to_dict()}, {self._dim})"

    def to_dict(self) -> dict[int, float]:
        return dict(zip(self.indices, self.values))

    def to_numpy(self) -> np.ndarray:
        dense = np.zeros(self._dim, dtype=np.float32)
        dense[self._indices] = self._values
        return dense

    def to_dense(self) -> list[float]:
        return self.to_numpy().tolist()

    def to_text(self) -> str:
        body = ",".join(
            f"{i + 1}:{format_float(v)}" for i, v in zip(self._indices.tolist(), self._values)
        )
        return "{" + body + "}/" + str(self._dim)


def encode_sparsevec(value: Any, allow_empty: Optional[bool] = None) -> bytes:
    vec = value if isinstance(value, SparseVector) else SparseVector.from_dense(value)
    if vec.dim == 0 and not config.allow_empty(allow_empty):
        raise EmptyVectorError("sparsevec must have at least 1 dimension")
    if vec.dim > 0 and vec.nnz >= vec.dim:
        raise InvalidSparseLayoutError(
            f"sparsevec must have fewer nonzero elements than dimensions, got nnz={vec.nnz} dim={vec.dim}"
        )
    return (
        _HEADER.pack(vec.dim, vec.nnz, 0)
        + vec._indices.astype(">i4").tobytes()
        + vec._values.astype(">f4").tobytes()
    )


def decode_sparsevec(buf: bytes) -> SparseVector:
    require_length(buf, _HEADER.size, "sparsevec header")
    dim, nnz, reserved = _HEADER.unpack_from(buf)
    if reserved != 0:
        raise ReservedFieldNonZeroError(f"expected reserved field to be 0, got {reserved}")
    if dim < 0 or nnz < 0:
        raise InvalidSparseLayoutError(f"negative sparsevec header field: dim={dim} nnz={nnz}")
    require_length(buf, _HEADER.size + 8 * nnz, f"sparsevec with {nnz} nonzero elements")
    indices = np.frombuffer(buf, dtype=">i4", count=nnz, offset=_HEADER.size).astype(np.int32)
    values = np.frombuffer(buf, dtype=">f4", count=nnz, offset=_HEADER.size + 4 * nnz).astype(np.float32)
    _check_layout(dim, indices)
    return SparseVector._from_arrays(dim, indices, values)


__all__ = ["SparseVector", "encode_sparsevec", "decode_sparsevec"]
