"""Dense single-precision vector (`vector` column) and its binary codec.

Wire layout::

    u16 dim | u16 reserved (0) | dim x f32, all big-endian
"""
import struct
from typing import Any, Iterator, Optional

import numpy as np

from . import config
from ._common import format_float, parse_bracketed, readonly, require_length
from .errors import (
    DimensionOverflowError,
    EmptyVectorError,
    ReservedFieldNonZeroError,
)

MAX_DIM = 65535

_HEADER = struct.Struct(">HH")


class Vector:
    """Immutable dense vector of 32-bit floats.

    Equality compares stored bit patterns, so NaN payloads and signed zeros
    survive a round trip and compare equal to themselves.
    """

    type_name = "vector"
    __slots__ = ("_value",)

    def __init__(self, value: Any):
        if isinstance(value, Vector):
            self._value = value._value
            return
        arr = np.array(value, dtype=np.float32)
        if arr.ndim != 1:
            raise ValueError(f"expected a one-dimensional sequence, got ndim={arr.ndim}")
        self._value = readonly(arr)

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "Vector":
        obj = cls.__new__(cls)
        obj._value = readonly(arr)
        return obj

    @classmethod
    def from_text(cls, text: str) -> "Vector":
        return cls(parse_bracketed(text, "vector"))

    def __len__(self) -> int:
        return self._value.shape[0]

    def __iter__(self) -> Iterator[float]:
        return iter(self._value.tolist())

    def __getitem__(self, index: int) -> float:
        return float(self._value[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._value.tobytes() == other._value.tobytes()

    def __hash__(self) -> int:
        return hash((self.type_name, self._value.tobytes()))

    def __repr__(self) -> str:
        return f"Vector({self.to_list()})"

    def to_list(self) -> list[float]:
        return self._value.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._value

    def to_text(self) -> str:
        return "[" + ",".join(format_float(x) for x in self._value) + "]"


def encode_vector(value: Any, allow_empty: Optional[bool] = None) -> bytes:
    vec = Vector(value)
    dim = len(vec)
    if dim > MAX_DIM:
        raise DimensionOverflowError(f"vector cannot have more than {MAX_DIM} dimensions, got {dim}")
    if dim == 0 and not config.allow_empty(allow_empty):
        raise EmptyVectorError("vector must have at least 1 dimension")
    return _HEADER.pack(dim, 0) + vec._value.astype(">f4").tobytes()


def decode_vector(buf: bytes) -> Vector:
    require_length(buf, _HEADER.size, "vector header")
    dim, reserved = _HEADER.unpack_from(buf)
    if reserved != 0:
        raise ReservedFieldNonZeroError(f"expected reserved field to be 0, got {reserved}")
    require_length(buf, _HEADER.size + 4 * dim, f"vector of {dim} dimensions")
    arr = np.frombuffer(buf, dtype=">f4", count=dim, offset=_HEADER.size)
    return Vector._from_array(arr.astype(np.float32))


__all__ = ["MAX_DIM", "Vector", "encode_vector", "decode_vector"]
