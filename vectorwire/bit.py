"""Fixed-length bit string (`bit` column) and its binary codec.

Wire layout: ``i32`` big-endian bit length followed by ``ceil(len / 8)``
bytes. Bit ``i`` lives in byte ``i // 8`` at position ``7 - i % 8``.
"""
import struct
from typing import Any, Iterator, Sequence

import numpy as np

from ._common import INT32_MAX, require_length
from .errors import DimensionOverflowError, TextFormatError, VectorCodecError

_HEADER = struct.Struct(">i")


class Bit:
    """Immutable bit string with an explicit bit length."""

    type_name = "bit"
    __slots__ = ("_len", "_data")

    def __init__(self, value: Sequence[bool]):
        if isinstance(value, Bit):
            self._len, self._data = value._len, value._data
            return
        if isinstance(value, (str, bytes, bytearray, memoryview)):
            raise TypeError("use Bit.from_text() for strings and Bit.from_bytes() for raw bytes")
        bits = np.array(value, dtype=bool)
        if bits.ndim != 1:
            raise ValueError(f"expected a one-dimensional sequence, got ndim={bits.ndim}")
        self._len = bits.shape[0]
        # packbits is MSB-first and zero-fills the trailing byte
        self._data = np.packbits(bits).tobytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Bit":
        """Whole-byte bit string: the length is ``8 * len(data)``."""
        obj = cls.__new__(cls)
        obj._data = bytes(data)
        obj._len = 8 * len(obj._data)
        return obj

    @classmethod
    def from_text(cls, text: str) -> "Bit":
        cleaned = text.strip()
        if set(cleaned) - {"0", "1"}:
            raise TextFormatError(f"bit literal may only contain '0' and '1': {text!r}")
        return cls([c == "1" for c in cleaned])

    @classmethod
    def _from_wire(cls, length: int, data: bytes) -> "Bit":
        obj = cls.__new__(cls)
        obj._len = length
        obj._data = data
        return obj

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[bool]:
        return iter(self.to_list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bit):
            return NotImplemented
        return self._len == other._len and self._data == other._data

    def __hash__(self) -> int:
        return hash((self.type_name, self._len, self._data))

    def __repr__(self) -> str:
        return f"Bit('{self.to_text()}')"

    def to_bytes(self) -> bytes:
        return self._data

    def to_list(self) -> list[bool]:
        bits = np.unpackbits(np.frombuffer(self._data, dtype=np.uint8))
        return bits[: self._len].astype(bool).tolist()

    def to_text(self) -> str:
        return "".join("1" if b else "0" for b in self.to_list())


def encode_bit(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = Bit.from_bytes(value)
    bit = Bit(value)
    if len(bit) > INT32_MAX:
        raise DimensionOverflowError(f"bit string cannot be longer than {INT32_MAX} bits, got {len(bit)}")
    return _HEADER.pack(len(bit)) + bit.to_bytes()


def decode_bit(buf: bytes) -> Bit:
    require_length(buf, _HEADER.size, "bit header")
    (length,) = _HEADER.unpack_from(buf)
    if length < 0:
        raise VectorCodecError(f"bit length must be non-negative, got {length}")
    nbytes = (length + 7) // 8
    require_length(buf, _HEADER.size + nbytes, f"bit string of {length} bits")
    return Bit._from_wire(length, bytes(buf[_HEADER.size : _HEADER.size + nbytes]))


__all__ = ["Bit", "encode_bit", "decode_bit"]
