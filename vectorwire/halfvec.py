"""Half-precision vector (`halfvec` column) and its binary codec.

Same header as `vector`, elements are IEEE754 binary16 big-endian.
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
from .vector import MAX_DIM

_HEADER = struct.Struct(">HH")


def _narrow(value: Any, source_dtype: Any = None) -> np.ndarray:
    # float -> float16 casts round to nearest even; out-of-range magnitudes become inf
    with np.errstate(over="ignore"):
        arr = np.array(value, dtype=source_dtype)
        return arr.astype(np.float16)


class HalfVector:
    """Immutable dense vector of 16-bit floats.

    Building one from wider floats narrows with round-to-nearest-even, so
    there is no way back to the original values; round trips only hold for
    data that is already half precision.
    """

    type_name = "halfvec"
    __slots__ = ("_value",)

    def __init__(self, value: Any):
        if isinstance(value, HalfVector):
            self._value = value._value
            return
        arr = _narrow(value)
        if arr.ndim != 1:
            raise ValueError(f"expected a one-dimensional sequence, got ndim={arr.ndim}")
        self._value = readonly(arr)

    @classmethod
    def from_f32(cls, value: Any) -> "HalfVector":
        """Narrow single-precision floats (first rounded to float32) to half precision."""
        return cls(_narrow(value, np.float32))

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "HalfVector":
        obj = cls.__new__(cls)
        obj._value = readonly(arr)
        return obj

    @classmethod
    def from_text(cls, text: str) -> "HalfVector":
        return cls(parse_bracketed(text, "halfvec"))

    def __len__(self) -> int:
        return self._value.shape[0]

    def __iter__(self) -> Iterator[float]:
        return iter(self._value.tolist())

    def __getitem__(self, index: int) -> float:
        return float(self._value[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HalfVector):
            return NotImplemented
        return self._value.tobytes() == other._value.tobytes()

    def __hash__(self) -> int:
        return hash((self.type_name, self._value.tobytes()))

    def __repr__(self) -> str:
        return f"HalfVector({self.to_list()})"

    def to_list(self) -> list[float]:
        return self._value.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._value

    def to_text(self) -> str:
        return "[" + ",".join(format_float(x) for x in self._value) + "]"


def encode_halfvec(value: Any, allow_empty: Optional[bool] = None) -> bytes:
    vec = HalfVector(value)
    dim = len(vec)
    if dim > MAX_DIM:
        raise DimensionOverflowError(f"halfvec cannot have more than {MAX_DIM} dimensions, got {dim}")
    if dim == 0 and not config.allow_empty(allow_empty):
        raise EmptyVectorError("halfvec must have at least 1 dimension")
    return _HEADER.pack(dim, 0) + vec._value.astype(">f2").tobytes()


def decode_halfvec(buf: bytes) -> HalfVector:
    require_length(buf, _HEADER.size, "halfvec header")
    dim, reserved = _HEADER.unpack_from(buf)
    if reserved != 0:
        raise ReservedFieldNonZeroError(f"expected reserved field to be 0, got {reserved}")
    require_length(buf, _HEADER.size + 2 * dim, f"halfvec of {dim} dimensions")
    arr = np.frombuffer(buf, dtype=">f2", count=dim, offset=_HEADER.size)
    return HalfVector._from_array(arr.astype(np.float16))


__all__ = ["HalfVector", "encode_halfvec", "decode_halfvec"]
